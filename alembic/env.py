from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from src.config import DATABASE_URL
from src.database import Base
from src.auth.models import User  # noqa: F401
from src.comment.models import Comment  # noqa: F401
from src.like.models import Like  # noqa: F401
from src.playlist.models import Playlist  # noqa: F401
from src.subscription.models import Subscription  # noqa: F401
from src.tweet.models import Tweet  # noqa: F401
from src.video.models import Video  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
