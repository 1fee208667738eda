"""Service catalog: the closed set of services an oracle may answer with."""

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from pydantic import BaseModel, Field


class Service(BaseModel):
    """A single support service in the catalog."""

    id: int = Field(ge=1, description="Numeric service identifier")
    name: str = Field(min_length=1, description="Canonical service name")

    model_config = {
        "frozen": True,
        "json_schema_extra": {"examples": [{"id": 4, "name": "Status de Entrega do Cartão"}]},
    }


DEFAULT_SERVICES: tuple[tuple[int, str], ...] = (
    (1, "Consulta Limite / Vencimento do cartão / Melhor dia de compra"),
    (2, "Segunda via de boleto de acordo"),
    (3, "Segunda via de Fatura"),
    (4, "Status de Entrega do Cartão"),
    (5, "Status de cartão"),
    (6, "Solicitação de aumento de limite"),
    (7, "Cancelamento de cartão"),
    (8, "Telefones de seguradoras"),
    (9, "Desbloqueio de Cartão"),
    (10, "Esqueceu senha / Troca de senha"),
    (11, "Perda e roubo"),
    (12, "Consulta do Saldo Conta do Mais"),
    (13, "Pagamento de contas"),
    (14, "Reclamações"),
    (15, "Atendimento humano"),
    (16, "Token de proposta"),
)


class Catalog:
    """
    Immutable registry of valid services, indexed by id.

    Build one at process start and pass it to every component that needs
    it. Iteration order is declaration order, which keeps the rendered
    prompt and the per-service report stable.
    """

    def __init__(self, services: Iterable[Service]) -> None:
        ordered = tuple(services)
        by_id: dict[int, Service] = {}
        for service in ordered:
            if service.id in by_id:
                raise ValueError(f"duplicate service id in catalog: {service.id}")
            by_id[service.id] = service
        if not ordered:
            raise ValueError("catalog must contain at least one service")
        self._services = ordered
        self._by_id = MappingProxyType(by_id)

    @classmethod
    def default(cls) -> "Catalog":
        """The fixed 16-service support catalog."""
        return cls(Service(id=sid, name=name) for sid, name in DEFAULT_SERVICES)

    def lookup(self, service_id: int) -> str | None:
        """Canonical name for ``service_id``, or None if it is not in the catalog."""
        service = self._by_id.get(service_id)
        return service.name if service else None

    def all(self) -> tuple[Service, ...]:
        return self._services

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._by_id

    def __iter__(self) -> Iterator[Service]:
        return iter(self._services)

    def __len__(self) -> int:
        return len(self._services)

    @property
    def min_id(self) -> int:
        return min(self._by_id)

    @property
    def max_id(self) -> int:
        return max(self._by_id)
