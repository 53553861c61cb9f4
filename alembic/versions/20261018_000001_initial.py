"""Initial schema: teams, players, matches, player_stats and training tables.

Revision ID: 20261018_000001
Revises:
Create Date: 2026-10-18 00:00:01
"""

from alembic import op  # type: ignore[attr-defined]
import sqlalchemy as sa

revision = "20261018_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_teams_name", "teams", ["name"], unique=False)

    op.create_table(
        "players",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "team_id",
            sa.Integer(),
            sa.ForeignKey("teams.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("jersey_number", sa.Integer(), nullable=True),
        sa.Column("position", sa.String(), nullable=True),
        sa.Column("is_injured", sa.Boolean(), nullable=True),
        sa.Column("injury_description", sa.String(), nullable=True),
        sa.Column("injury_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("return_to_play_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_players_team_id", "players", ["team_id"], unique=False)
    op.create_index("ix_players_name", "players", ["name"], unique=False)
    op.create_index("ix_players_is_injured", "players", ["is_injured"], unique=False)
    op.create_index(
        "ix_players_team_jersey", "players", ["team_id", "jersey_number"], unique=False
    )

    op.create_table(
        "matches",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "team_id",
            sa.Integer(),
            sa.ForeignKey("teams.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="90"),
        sa.Column("number_of_halves", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("has_overtime", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_matches_team_id", "matches", ["team_id"], unique=False)
    op.create_index("ix_matches_team_date", "matches", ["team_id", "date"], unique=False)

    op.create_table(
        "player_stats",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "player_id",
            sa.Integer(),
            sa.ForeignKey("players.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "match_id",
            sa.Integer(),
            sa.ForeignKey("matches.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("goals", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("assists", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("minutes_played", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("goals >= 0", name="ck_player_stats_goals_nonneg"),
        sa.CheckConstraint("assists >= 0", name="ck_player_stats_assists_nonneg"),
        sa.CheckConstraint("minutes_played >= 0", name="ck_player_stats_minutes_nonneg"),
    )
    op.create_index("ix_player_stats_player_id", "player_stats", ["player_id"], unique=False)
    op.create_index("ix_player_stats_match_id", "player_stats", ["match_id"], unique=False)
    op.create_index(
        "ix_player_stats_player_match",
        "player_stats",
        ["player_id", "match_id"],
        unique=False,
    )

    op.create_table(
        "training_sessions",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "team_id",
            sa.Integer(),
            sa.ForeignKey("teams.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
    )
    op.create_index("ix_training_sessions_team_id", "training_sessions", ["team_id"])
    op.create_index("ix_training_sessions_date", "training_sessions", ["date"])

    op.create_table(
        "training_attendance",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "session_id",
            sa.Integer(),
            sa.ForeignKey("training_sessions.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "player_id",
            sa.Integer(),
            sa.ForeignKey("players.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("is_present", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.String(), nullable=True),
    )
    op.create_index(
        "ix_training_attendance_session_id", "training_attendance", ["session_id"]
    )
    op.create_index(
        "ix_training_attendance_player_id", "training_attendance", ["player_id"]
    )

    op.create_table(
        "training_drills",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "session_id",
            sa.Integer(),
            sa.ForeignKey("training_sessions.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("drill_description", sa.String(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_training_drills_session_id", "training_drills", ["session_id"])

    op.create_table(
        "training_photos",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "session_id",
            sa.Integer(),
            sa.ForeignKey("training_sessions.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("caption", sa.String(), nullable=True),
        sa.Column("image_data", sa.LargeBinary(), nullable=True),
        sa.Column("thumbnail_data", sa.LargeBinary(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_training_photos_session_id", "training_photos", ["session_id"])


def downgrade() -> None:
    op.drop_table("training_photos")
    op.drop_table("training_drills")
    op.drop_table("training_attendance")
    op.drop_table("training_sessions")
    op.drop_table("player_stats")
    op.drop_table("matches")
    op.drop_table("players")
    op.drop_table("teams")
