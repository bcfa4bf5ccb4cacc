"""Event banner image

Revision ID: 8b2e4f6a1c33
Revises: 3f1c2a9d7b10
Create Date: 2026-10-26 10:00:00

"""
from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b2e4f6a1c33"
down_revision: Union[str, None] = "3f1c2a9d7b10"
branch_labels: Union[str, None] = None
depends_on: Union[str, None] = None


def upgrade() -> None:
    op.add_column("events", sa.Column("banner_base64", sa.Text(), nullable=True))


def downgrade() -> None:
    op.drop_column("events", "banner_base64")
