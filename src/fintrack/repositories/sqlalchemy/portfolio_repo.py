"""SQLAlchemy implementation of PortfolioRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from fintrack.domain.models import Portfolio
from fintrack.repositories.sqlalchemy.orm_models import PortfolioORM, PositionORM


class SqlAlchemyPortfolioRepository:
    """SQLAlchemy-backed portfolio repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Persist a new portfolio."""
        orm_portfolio = PortfolioORM(
            portfolio_id=portfolio.portfolio_id,
            user_id=portfolio.user_id,
            name=portfolio.name,
            description=portfolio.description,
            created_at_est=portfolio.created_at_est,
        )
        self._db.add(orm_portfolio)
        self._db.commit()
        self._db.refresh(orm_portfolio)
        return self._to_domain(orm_portfolio)

    def get_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        """Retrieve portfolio by ID."""
        orm_portfolio = self._db.query(PortfolioORM).filter(
            PortfolioORM.portfolio_id == portfolio_id
        ).first()
        return self._to_domain(orm_portfolio) if orm_portfolio else None

    def list_by_user(self, user_id: str) -> list[Portfolio]:
        """List all portfolios owned by a user, oldest first."""
        orm_portfolios = (
            self._db.query(PortfolioORM)
            .filter(PortfolioORM.user_id == user_id)
            .order_by(PortfolioORM.created_at_est, PortfolioORM.name)
            .all()
        )
        return [self._to_domain(p) for p in orm_portfolios]

    def update(self, portfolio: Portfolio) -> Portfolio:
        """Update name/description of an existing portfolio."""
        orm_portfolio = self._db.query(PortfolioORM).filter(
            PortfolioORM.portfolio_id == portfolio.portfolio_id
        ).first()
        if orm_portfolio:
            orm_portfolio.name = portfolio.name
            orm_portfolio.description = portfolio.description
            self._db.commit()
            self._db.refresh(orm_portfolio)
            return self._to_domain(orm_portfolio)
        raise ValueError(f"Portfolio not found: {portfolio.portfolio_id}")

    def delete(self, portfolio_id: str) -> None:
        """Delete a portfolio and all of its positions."""
        self._db.query(PositionORM).filter(
            PositionORM.portfolio_id == portfolio_id
        ).delete()
        self._db.query(PortfolioORM).filter(
            PortfolioORM.portfolio_id == portfolio_id
        ).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: PortfolioORM) -> Portfolio:
        """Convert ORM model to domain model."""
        return Portfolio(
            portfolio_id=orm.portfolio_id,
            user_id=orm.user_id,
            name=orm.name,
            description=orm.description,
            created_at_est=orm.created_at_est,
        )
