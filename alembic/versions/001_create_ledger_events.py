"""001: create ledger_events table

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ledger_events (
            id              BIGSERIAL       PRIMARY KEY,
            event_id        VARCHAR(32)     NOT NULL UNIQUE,
            event_type      VARCHAR(30)     NOT NULL,
            account         VARCHAR(128)    NOT NULL,
            payload         JSONB           NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_ledger_event_type CHECK (
                event_type IN (
                    'MINTED',
                    'BURNED',
                    'TRANSFERRED',
                    'DIVIDENDS_DISTRIBUTED',
                    'DIVIDEND_WITHDRAWN',
                    'STAKED',
                    'UNSTAKED',
                    'REWARD_CLAIMED',
                    'REWARD_POOL_FUNDED'
                )
            )
        );
    """)
    op.execute("CREATE INDEX idx_ledger_events_account ON ledger_events (account, id);")
    op.execute("CREATE INDEX idx_ledger_events_type_time ON ledger_events (event_type, created_at);")
    op.execute("COMMENT ON TABLE ledger_events IS 'Committed ledger operations, append-only audit log';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ledger_events CASCADE;")
