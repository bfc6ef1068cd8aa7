"""create_cashier_tables

Revision ID: c4a1e7d2b9f0
Revises:
Create Date: 2026-10-19 10:00:00.000000

캐셔 테이블 생성: cashier_departments, cashier_items, cashier_bills, cashier_bill_line_items.
Create cashier tables: departments, billable items, bills and bill line items.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c4a1e7d2b9f0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _voidable_columns() -> list[sa.Column]:
    # 무효화 공통 컬럼: Identity and soft-delete columns shared by every entity
    return [
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('uuid', sa.Uuid(), nullable=False, unique=True),
        sa.Column('voided', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('void_reason', sa.String(255), nullable=True),
        sa.Column('date_voided', sa.DateTime(timezone=True), nullable=True),
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # cashier_departments: 부서 (Departments grouping billable items)
    op.create_table(
        'cashier_departments',
        *_voidable_columns(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )
    op.create_index('ix_cashier_departments_name', 'cashier_departments', ['name'])

    # cashier_items: 과금 항목 (Billable items)
    op.create_table(
        'cashier_items',
        *_voidable_columns(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('department_id', sa.Integer(), sa.ForeignKey('cashier_departments.id', ondelete='SET NULL'), nullable=True),
        sa.Column('price', sa.Numeric(19, 2), server_default='0', nullable=False),
    )
    op.create_index('ix_cashier_items_name', 'cashier_items', ['name'])
    op.create_index('ix_cashier_items_department', 'cashier_items', ['department_id'])

    # cashier_bills: 청구서 (Bills; bill_adjusted_id links an adjusting bill to the original)
    op.create_table(
        'cashier_bills',
        *_voidable_columns(),
        sa.Column('receipt_number', sa.String(255), nullable=False, unique=True),
        sa.Column('patient_uuid', sa.Uuid(), nullable=True),
        sa.Column('status', sa.String(20), server_default='PENDING', nullable=False),
        sa.Column('bill_adjusted_id', sa.Integer(), sa.ForeignKey('cashier_bills.id', ondelete='SET NULL'), nullable=True),
    )

    # cashier_bill_line_items: 청구서 항목 (Bill line items)
    op.create_table(
        'cashier_bill_line_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('bill_id', sa.Integer(), sa.ForeignKey('cashier_bills.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('cashier_items.id'), nullable=False),
        sa.Column('price', sa.Numeric(19, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), server_default='1', nullable=False),
        sa.Column('line_item_order', sa.Integer(), server_default='0', nullable=False),
    )
    op.create_index('ix_cashier_bill_line_items_bill', 'cashier_bill_line_items', ['bill_id'])


def downgrade() -> None:
    op.drop_index('ix_cashier_bill_line_items_bill', table_name='cashier_bill_line_items')
    op.drop_table('cashier_bill_line_items')
    op.drop_table('cashier_bills')
    op.drop_index('ix_cashier_items_department', table_name='cashier_items')
    op.drop_index('ix_cashier_items_name', table_name='cashier_items')
    op.drop_table('cashier_items')
    op.drop_index('ix_cashier_departments_name', table_name='cashier_departments')
    op.drop_table('cashier_departments')
