"""Product repositories.

``ProductRepository`` is the contract the catalog service depends on.
``SqlAlchemyProductRepository`` backs it with an async SQLAlchemy session;
``InMemoryProductRepository`` keeps products in a process-local dict.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from products_service.catalog.models import Product


@dataclass(frozen=True)
class ProductFilter:
    """Filter parameters for product queries.

    Attributes:
        available: Restrict to products with this availability, or no
            restriction when None.
    """

    available: bool | None = None

    def matches(self, product: Product) -> bool:
        """Check a loaded product against the filter."""
        if self.available is not None and product.available != self.available:
            return False
        return True


NO_FILTER = ProductFilter()
AVAILABLE_ONLY = ProductFilter(available=True)

PRODUCT_COLUMNS = frozenset(Product.__table__.columns.keys())


def check_columns(fields: Mapping[str, Any]) -> None:
    """Reject field names that are not columns of the products table.

    Raises:
        ValueError: If any key is not a product column.
    """
    unknown = set(fields) - PRODUCT_COLUMNS
    if unknown:
        raise ValueError(f"Unknown product fields: {', '.join(sorted(unknown))}")


class ProductRepository(ABC):
    """Repository contract for the products table."""

    @abstractmethod
    async def insert(self, fields: Mapping[str, Any]) -> Product:
        """Persist a new product; the store assigns its id."""

    @abstractmethod
    async def find_many(
        self,
        product_filter: ProductFilter,
        limit: int,
        offset: int,
    ) -> Sequence[Product]:
        """Return up to ``limit`` matching products after skipping ``offset``."""

    @abstractmethod
    async def count(self, product_filter: ProductFilter) -> int:
        """Count matching products."""

    @abstractmethod
    async def find_unique(
        self,
        product_id: int,
        product_filter: ProductFilter,
    ) -> Product | None:
        """Return the product with this id if it also matches the filter."""

    @abstractmethod
    async def find_many_by_id(self, ids: Iterable[int]) -> Sequence[Product]:
        """Return products whose id is in ``ids``, with no other filter."""

    @abstractmethod
    async def update(self, product_id: int, fields: Mapping[str, Any]) -> Product:
        """Apply a partial update by primary key.

        Raises:
            LookupError: If no product has this id.
            ValueError: If a field is not a product column.
        """

    @abstractmethod
    async def update_where(
        self,
        product_id: int,
        fields: Mapping[str, Any],
        product_filter: ProductFilter,
    ) -> Product | None:
        """Apply a partial update only if the row also matches the filter.

        Returns:
            The updated product, or None if no row was affected.
        """


class SqlAlchemyProductRepository(ProductRepository):
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = SqlAlchemyProductRepository(session)
            products = await repo.find_many(AVAILABLE_ONLY, limit=10, offset=0)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def insert(self, fields: Mapping[str, Any]) -> Product:
        """Save a new product to database.

        Args:
            fields: Column values for the new row.

        Returns:
            Saved product with its assigned id.
        """
        check_columns(fields)
        product = Product(**fields)
        self.session.add(product)
        await self.session.flush()
        return product

    async def find_many(
        self,
        product_filter: ProductFilter,
        limit: int,
        offset: int,
    ) -> Sequence[Product]:
        """Find products with filtering and pagination.

        Args:
            product_filter: Filter parameters.
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Sequence of matching products, ordered by id.
        """
        query = select(Product)

        conditions = self._conditions(product_filter)
        if conditions:
            query = query.where(and_(*conditions))

        query = query.order_by(Product.id.asc()).limit(limit).offset(offset)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, product_filter: ProductFilter) -> int:
        """Count products matching filters.

        Args:
            product_filter: Filter parameters.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id))

        conditions = self._conditions(product_filter)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def find_unique(
        self,
        product_id: int,
        product_filter: ProductFilter,
    ) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            product_filter: Additional constraints on the row.

        Returns:
            Product if found, None otherwise.
        """
        conditions = [Product.id == product_id, *self._conditions(product_filter)]
        query = select(Product).where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_many_by_id(self, ids: Iterable[int]) -> Sequence[Product]:
        """Get all products whose id is in the given collection.

        Args:
            ids: Product IDs.

        Returns:
            Matching products, ordered by id.
        """
        ids = list(ids)
        if not ids:
            return []

        query = select(Product).where(Product.id.in_(ids)).order_by(Product.id.asc())

        result = await self.session.execute(query)
        return result.scalars().all()

    async def update(self, product_id: int, fields: Mapping[str, Any]) -> Product:
        """Update columns of an existing product.

        Args:
            product_id: Product ID.
            fields: Column values to overwrite.

        Returns:
            Updated product.

        Raises:
            LookupError: If no product has this id.
        """
        check_columns(fields)
        product = await self.session.get(Product, product_id)
        if product is None:
            raise LookupError(f"Product {product_id} does not exist")

        for name, value in fields.items():
            setattr(product, name, value)

        await self.session.flush()
        return product

    async def update_where(
        self,
        product_id: int,
        fields: Mapping[str, Any],
        product_filter: ProductFilter,
    ) -> Product | None:
        """Update a product in a single conditional UPDATE ... RETURNING.

        Args:
            product_id: Product ID.
            fields: Column values to overwrite.
            product_filter: Conditions the row must still satisfy.

        Returns:
            Updated product, or None if no row matched.
        """
        check_columns(fields)
        conditions = [Product.id == product_id, *self._conditions(product_filter)]
        stmt = (
            update(Product)
            .where(and_(*conditions))
            .values(**fields)
            .returning(Product)
            .execution_options(populate_existing=True)
        )

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _conditions(self, product_filter: ProductFilter) -> list[Any]:
        """Build SQLAlchemy conditions for a filter.

        Args:
            product_filter: Filter parameters.

        Returns:
            List of column expressions.
        """
        conditions = []
        if product_filter.available is not None:
            conditions.append(Product.available == product_filter.available)
        return conditions


class InMemoryProductRepository(ProductRepository):
    """In-memory repository for products.

    Assigns sequential ids starting at 1, like a database sequence.
    """

    def __init__(self) -> None:
        self._products: dict[int, Product] = {}
        self._next_id = 1

    async def insert(self, fields: Mapping[str, Any]) -> Product:
        """Save a new product."""
        check_columns(fields)
        values = dict(fields)
        values.setdefault("available", True)
        product = Product(**values)

        now = datetime.now(timezone.utc)
        product.id = self._next_id
        product.created_at = now
        product.updated_at = now

        self._products[product.id] = product
        self._next_id += 1
        return product

    async def find_many(
        self,
        product_filter: ProductFilter,
        limit: int,
        offset: int,
    ) -> Sequence[Product]:
        """List matching products in id order."""
        matching = self._matching(product_filter)
        return matching[offset : offset + limit]

    async def count(self, product_filter: ProductFilter) -> int:
        """Count matching products."""
        return len(self._matching(product_filter))

    async def find_unique(
        self,
        product_id: int,
        product_filter: ProductFilter,
    ) -> Product | None:
        """Get product by ID if it matches the filter."""
        product = self._products.get(product_id)
        if product is None or not product_filter.matches(product):
            return None
        return product

    async def find_many_by_id(self, ids: Iterable[int]) -> Sequence[Product]:
        """Get products by a collection of IDs."""
        wanted = set(ids)
        return [p for p in self._matching(NO_FILTER) if p.id in wanted]

    async def update(self, product_id: int, fields: Mapping[str, Any]) -> Product:
        """Update an existing product."""
        check_columns(fields)
        product = self._products.get(product_id)
        if product is None:
            raise LookupError(f"Product {product_id} does not exist")
        self._apply(product, fields)
        return product

    async def update_where(
        self,
        product_id: int,
        fields: Mapping[str, Any],
        product_filter: ProductFilter,
    ) -> Product | None:
        """Update a product only if it matches the filter."""
        check_columns(fields)
        product = await self.find_unique(product_id, product_filter)
        if product is None:
            return None
        self._apply(product, fields)
        return product

    def _matching(self, product_filter: ProductFilter) -> list[Product]:
        return [
            product
            for _, product in sorted(self._products.items())
            if product_filter.matches(product)
        ]

    def _apply(self, product: Product, fields: Mapping[str, Any]) -> None:
        for name, value in fields.items():
            setattr(product, name, value)
        product.updated_at = datetime.now(timezone.utc)
