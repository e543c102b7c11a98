"""SQLAlchemy implementation of PositionRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from fintrack.domain.models import Position
from fintrack.repositories.sqlalchemy.orm_models import PositionORM


class SqlAlchemyPositionRepository:
    """SQLAlchemy-backed position repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, position: Position) -> Position:
        """Persist a new position."""
        orm_position = PositionORM(
            position_id=position.position_id,
            portfolio_id=position.portfolio_id,
            symbol=position.symbol,
            shares=position.shares,
            purchase_price=position.purchase_price,
            purchase_date=position.purchase_date,
            notes=position.notes,
        )
        self._db.add(orm_position)
        self._db.commit()
        self._db.refresh(orm_position)
        return self._to_domain(orm_position)

    def get_by_id(self, position_id: str) -> Optional[Position]:
        """Retrieve position by ID."""
        orm_position = self._db.query(PositionORM).filter(
            PositionORM.position_id == position_id
        ).first()
        return self._to_domain(orm_position) if orm_position else None

    def list_by_portfolio(self, portfolio_id: str) -> list[Position]:
        """List positions of a portfolio ordered by purchase date."""
        orm_positions = (
            self._db.query(PositionORM)
            .filter(PositionORM.portfolio_id == portfolio_id)
            .order_by(PositionORM.purchase_date, PositionORM.created_at_est)
            .all()
        )
        return [self._to_domain(p) for p in orm_positions]

    def update(self, position: Position) -> Position:
        """Update an existing position."""
        orm_position = self._db.query(PositionORM).filter(
            PositionORM.position_id == position.position_id
        ).first()
        if orm_position:
            orm_position.symbol = position.symbol
            orm_position.shares = position.shares
            orm_position.purchase_price = position.purchase_price
            orm_position.purchase_date = position.purchase_date
            orm_position.notes = position.notes
            self._db.commit()
            self._db.refresh(orm_position)
            return self._to_domain(orm_position)
        raise ValueError(f"Position not found: {position.position_id}")

    def delete(self, position_id: str) -> None:
        """Delete a single position."""
        self._db.query(PositionORM).filter(
            PositionORM.position_id == position_id
        ).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: PositionORM) -> Position:
        """Convert ORM model to domain model."""
        return Position(
            position_id=orm.position_id,
            portfolio_id=orm.portfolio_id,
            symbol=orm.symbol,
            shares=float(orm.shares),
            purchase_price=float(orm.purchase_price),
            purchase_date=orm.purchase_date,
            notes=orm.notes,
        )
