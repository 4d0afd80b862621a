"""Mapper functions to convert between domain models and SQLAlchemy models.

Storage keeps enums as plain strings and monthly values as a JSON list; the
conversion back to frozen domain entities happens here only.
"""

from contabil.domain import entities as domain
from contabil.domain.catalog import StatementType
from contabil.database.models import (
    Client as ORMClient,
    ChartAccount as ORMChartAccount,
    Movement as ORMMovement,
    CategoryMapping as ORMCategoryMapping,
)
from contabil.utils.amount_parser import coerce_monthly_values


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        created_at=orm_client.created_at,
    )


def account_to_domain(orm_account: ORMChartAccount) -> domain.Account:
    """Convert SQLAlchemy ChartAccount model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.code,
        name=orm_account.name,
        level=orm_account.level,
        kind=domain.AccountKind(orm_account.kind),
        alias=orm_account.alias,
        report_type=orm_account.report_type,
        report_category=orm_account.report_category,
    )


def movement_to_domain(orm_movement: ORMMovement) -> domain.Movement:
    """Convert SQLAlchemy Movement model to domain Movement entity."""
    return domain.Movement(
        id=orm_movement.id,
        account_code=orm_movement.account_code,
        name=orm_movement.name,
        level=orm_movement.level,
        statement_type=StatementType(orm_movement.statement_type),
        year=orm_movement.year,
        category=orm_movement.category,
        monthly_values=coerce_monthly_values(orm_movement.monthly_values),
        is_mapped=orm_movement.is_mapped,
    )


def category_mapping_to_domain(orm_mapping: ORMCategoryMapping) -> domain.CategoryMapping:
    """Convert SQLAlchemy CategoryMapping model to domain CategoryMapping entity."""
    return domain.CategoryMapping(
        id=orm_mapping.id,
        client_id=orm_mapping.client_id,
        account_code=orm_mapping.account_code,
        account_name=orm_mapping.account_name,
        category=orm_mapping.category,
        updated_at=orm_mapping.updated_at,
    )
