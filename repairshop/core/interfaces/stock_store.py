"""Abstract interfaces for the stock ledger and part catalog."""

from abc import ABC, abstractmethod

from repairshop.core.entities.stock import Part, StockMovement


class IStockStore(ABC):
    """Interface for stock movement persistence (the ledger)."""

    @abstractmethod
    async def add_movement(self, movement: StockMovement) -> StockMovement:
        """Append a movement and return it with its assigned ID."""
        pass

    @abstractmethod
    async def get_movement(self, movement_id: int) -> StockMovement | None:
        """Get movement by ID."""
        pass

    @abstractmethod
    async def update_movement(self, movement: StockMovement) -> StockMovement:
        """Replace an existing movement in place."""
        pass

    @abstractmethod
    async def delete_movement(self, movement_id: int) -> bool:
        """Permanently remove a movement. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_by_part(self, part_id: str) -> list[StockMovement]:
        """All movements for a part, ordered by occurred_at DESC, id DESC."""
        pass

    @abstractmethod
    async def list_all(self) -> list[StockMovement]:
        """Every movement in the ledger."""
        pass


class IPartCatalog(ABC):
    """Interface for the spare part catalog."""

    @abstractmethod
    async def get_part(self, part_id: str) -> Part | None:
        """Get part by ID."""
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Part | None:
        """Case-insensitive exact name lookup."""
        pass

    @abstractmethod
    async def list_parts(self) -> list[Part]:
        """All catalog parts ordered by name."""
        pass

    @abstractmethod
    async def create_part(self, part: Part) -> Part:
        """Register a new part."""
        pass
