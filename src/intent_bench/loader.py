"""Sample loader for `;`-delimited intent files."""

import csv
from collections.abc import Iterator
from pathlib import Path

from intent_bench.exceptions import LoadError
from intent_bench.models.catalog import Catalog
from intent_bench.models.sample import Sample
from intent_bench.observability import get_logger

logger = get_logger(__name__)

DELIMITER = ";"
MIN_FIELDS = 3


def _read_records(path: Path) -> Iterator[tuple[int, list[str]]]:
    """Yield (record number, fields) pairs, converting I/O and CSV errors to LoadError."""
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f, delimiter=DELIMITER)
            for number, record in enumerate(reader, start=1):
                yield number, record
    except OSError as e:
        raise LoadError(f"cannot read file: {e}", path=str(path)) from e
    except csv.Error as e:
        raise LoadError(f"malformed CSV: {e}", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise LoadError(f"cannot decode file as UTF-8: {e}", path=str(path)) from e


def _is_header(record: list[str]) -> bool:
    return (
        record[0].strip().lower() == "service_id"
        or record[2].strip().lower() == "intent"
    )


def load_samples(path: str | Path, catalog: Catalog) -> list[Sample]:
    """
    Load and validate labeled samples.

    Expected columns: ``service_id;service_name;intent``. Rows with fewer
    than three fields are skipped, as is a header on the first record.

    Every id must exist in the catalog; otherwise the whole file is
    rejected. A declared name that disagrees with the catalog is logged and
    replaced by the canonical name.

    Args:
        path: Path to the input file.
        catalog: Catalog used to validate ids and normalize names.

    Returns:
        Samples in file order.

    Raises:
        LoadError: If the file is unreadable, an id is not an integer, or an
            id is not in the catalog.
    """
    path = Path(path)
    samples: list[Sample] = []

    for number, record in _read_records(path):
        if len(record) < MIN_FIELDS:
            continue
        if number == 1 and _is_header(record):
            continue

        raw_id = record[0].strip()
        try:
            service_id = int(raw_id)
        except ValueError as e:
            raise LoadError(f"invalid service_id {raw_id!r}", path=str(path), line=number) from e

        canonical = catalog.lookup(service_id)
        if canonical is None:
            raise LoadError(
                f"service_id {service_id} is not in the catalog "
                f"({catalog.min_id}..{catalog.max_id})",
                path=str(path),
                line=number,
            )

        declared = record[1].strip()
        if declared and declared.casefold() != canonical.casefold():
            logger.warning(
                "line %d: service name differs from catalog: file=%r, catalog=%r (using catalog)",
                number,
                declared,
                canonical,
            )

        samples.append(
            Sample(
                service_id=service_id,
                service_name=canonical,
                intent_text=record[2].strip(),
                line=number,
            )
        )

    logger.debug("Loaded %d samples from %s", len(samples), path)
    return samples


def load_intents(path: str | Path) -> list[str]:
    """
    Load bare intent texts for the classification service harness.

    Ids are not validated here; the service under test is the one
    producing ids. Short rows and ``service_id`` header rows are skipped.

    Raises:
        LoadError: If the file cannot be read or parsed.
    """
    path = Path(path)
    intents: list[str] = []
    for _, record in _read_records(path):
        if len(record) < MIN_FIELDS:
            continue
        if record[0].strip().lower() == "service_id":
            continue
        intents.append(record[2].strip())
    return intents
