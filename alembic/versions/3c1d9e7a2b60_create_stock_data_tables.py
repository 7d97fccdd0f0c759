"""create tickers and dataset tables

Revision ID: 3c1d9e7a2b60
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1d9e7a2b60'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DECIMAL = sa.Numeric(18, 6)


def _series_columns():
    return [
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('symbol', sa.String(20), sa.ForeignKey('tickers.symbol', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('request_id', sa.String(32), nullable=True),
    ]


def _create_series_table(name, *columns):
    op.create_table(
        name,
        *_series_columns(),
        *columns,
        sa.UniqueConstraint('symbol', 'date', name=f'uq_{name}_symbol_date'),
    )
    op.create_index(f'ix_{name}_symbol', name, ['symbol'])


SERIES_TABLES = [
    'short_interest',
    'short_volume',
    'borrow_fee',
    'borrow_fee_daily',
    'failure_to_deliver',
    'reddit_mentions',
    'option_chain_summary',
    'stock_split',
    'finra_short_interest',
]


def upgrade() -> None:
    op.create_table(
        'tickers',
        sa.Column('symbol', sa.String(20), primary_key=True),
        sa.Column('exchange', sa.String(50), nullable=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), onupdate=sa.func.now()),
    )

    _create_series_table(
        'short_interest',
        sa.Column('short_interest_percent', DECIMAL, nullable=False),
        sa.Column('short_position', sa.BigInteger(), nullable=False),
        sa.Column('days_to_cover', DECIMAL, nullable=False),
        sa.Column('change_number', sa.BigInteger(), nullable=False),
        sa.Column('change_percent', DECIMAL, nullable=False),
    )

    venues = ['rt', 'st', 'lt', 'fs', 'fse', 'xnas', 'xphl', 'xnys', 'arcx', 'xcis',
              'xase', 'xchi', 'edgx', 'bats', 'edga', 'baty']
    _create_series_table(
        'short_volume',
        *[sa.Column(v, sa.BigInteger(), nullable=False) for v in venues],
        sa.Column('short_volume_percent', DECIMAL, nullable=False),
    )

    _create_series_table(
        'borrow_fee',
        sa.Column('available', sa.BigInteger(), nullable=False),
        sa.Column('fee', DECIMAL, nullable=False),
        sa.Column('rebate', DECIMAL, nullable=False),
    )

    # Daily OHLC derived from borrow_fee readings
    _create_series_table(
        'borrow_fee_daily',
        sa.Column('open', DECIMAL, nullable=False),
        sa.Column('high', DECIMAL, nullable=False),
        sa.Column('low', DECIMAL, nullable=False),
        sa.Column('close', DECIMAL, nullable=False),
        sa.Column('average', DECIMAL, nullable=False),
        sa.Column('data_point_count', sa.Integer(), nullable=False),
        sa.Column('max_available', sa.BigInteger(), nullable=False),
        sa.Column('min_available', sa.BigInteger(), nullable=False),
        sa.Column('average_available', sa.BigInteger(), nullable=False),
    )

    _create_series_table(
        'failure_to_deliver',
        sa.Column('failure_to_deliver', sa.BigInteger(), nullable=False),
        sa.Column('price', DECIMAL, nullable=False),
        sa.Column('volume', sa.BigInteger(), nullable=False),
        sa.Column('settlement_date', sa.DateTime(), nullable=True),
        sa.Column('cusip', sa.String(20), nullable=True),
        sa.Column('company_name', sa.String(255), nullable=True),
    )

    _create_series_table(
        'reddit_mentions',
        sa.Column('subreddit', sa.String(100), nullable=True),
        sa.Column('created', sa.DateTime(), nullable=False),
        sa.Column('sentiment', sa.Numeric(10, 6), nullable=True),
        sa.Column('author', sa.String(100), nullable=True),
        sa.Column('text', sa.Text(), nullable=True),
        sa.Column('link', sa.String(500), nullable=True),
        sa.Column('thing_id', sa.String(50), nullable=True),
        sa.Column('thing_type', sa.String(20), nullable=True),
    )

    _create_series_table(
        'option_chain_summary',
        sa.Column('total_call_volume', sa.BigInteger(), nullable=False),
        sa.Column('total_put_volume', sa.BigInteger(), nullable=False),
        sa.Column('total_call_open_interest', sa.BigInteger(), nullable=False),
        sa.Column('total_put_open_interest', sa.BigInteger(), nullable=False),
        sa.Column('put_call_volume_ratio', DECIMAL, nullable=False),
        sa.Column('put_call_open_interest_ratio', DECIMAL, nullable=False),
        sa.Column('max_pain', DECIMAL, nullable=True),
        sa.Column('total_implied_volatility', DECIMAL, nullable=True),
    )

    _create_series_table(
        'stock_split',
        sa.Column('split_ratio', sa.String(20), nullable=False),
        sa.Column('split_factor', DECIMAL, nullable=False),
        sa.Column('from_factor', DECIMAL, nullable=False),
        sa.Column('to_factor', DECIMAL, nullable=False),
        sa.Column('ex_date', sa.DateTime(), nullable=True),
        sa.Column('record_date', sa.DateTime(), nullable=True),
        sa.Column('payable_date', sa.DateTime(), nullable=True),
        sa.Column('announcement_date', sa.DateTime(), nullable=True),
        sa.Column('company_name', sa.String(255), nullable=True),
    )

    _create_series_table(
        'finra_short_interest',
        sa.Column('short_interest', sa.BigInteger(), nullable=False),
        sa.Column('previous_short_interest', sa.BigInteger(), nullable=False),
        sa.Column('avg_daily_volume', sa.BigInteger(), nullable=False),
        sa.Column('days_to_cover', DECIMAL, nullable=False),
        sa.Column('change_percent', DECIMAL, nullable=False),
        sa.Column('settlement_date', sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    # Children first
    for name in reversed(SERIES_TABLES):
        op.drop_index(f'ix_{name}_symbol', table_name=name)
        op.drop_table(name)
    op.drop_table('tickers')
