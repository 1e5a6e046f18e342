"""Flask CLI 命令: 建表与演示数据.

用法:
    flask --app bookkeeping init-db
    flask --app bookkeeping seed
"""

from __future__ import annotations

from datetime import timedelta

import click
from flask import Flask

from bookkeeping import db
from bookkeeping.constants.entity_types import LogOrigin, LogSubtype, RunQuality, RunType
from bookkeeping.models import Log, Run, Subsystem, Tag, User
from bookkeeping.utils.structlog_config import get_system_logger
from bookkeeping.utils.time_utils import time_utils

SEED_USERS = ((1, "John Doe"), (2, "Jan Jansen"))
SEED_TAGS = ("FOOD", "RUN", "MAINTENANCE", "GLOBAL", "TEST", "OTHER")
SEED_SUBSYSTEMS = ("TPC", "ITS", "MFT", "FT0", "TOF")
SEED_RUN_COUNT = 5


def seed_demo_data() -> dict[str, int]:
    """写入演示数据(不 commit); 已存在用户时视为已初始化, 直接跳过.

    Returns:
        各实体写入数量.

    """
    if db.session.query(User).first() is not None:
        return {}

    users = [User(external_id=external_id, name=name) for external_id, name in SEED_USERS]
    tags = [Tag(text=text) for text in SEED_TAGS]
    subsystems = [Subsystem(name=name) for name in SEED_SUBSYSTEMS]
    db.session.add_all([*users, *tags, *subsystems])

    start = time_utils.now() - timedelta(days=1)
    run_types = (RunType.PHYSICS, RunType.COSMICS, RunType.TECHNICAL)
    runs = []
    for index in range(1, SEED_RUN_COUNT + 1):
        o2_start = start + timedelta(hours=index)
        runs.append(
            Run(
                run_number=index,
                time_o2_start=o2_start,
                time_o2_end=o2_start + timedelta(minutes=45),
                time_trg_start=o2_start + timedelta(minutes=1),
                time_trg_end=o2_start + timedelta(minutes=44),
                activity_id=f"activity-{index:04d}",
                run_type=run_types[index % len(run_types)],
                run_quality=RunQuality.GOOD,
                n_detectors=3,
                n_flps=10,
                n_epns=10,
                n_subtimeframes=1000 * index,
                bytes_read_out=1024 * 1024 * index,
            ),
        )
    db.session.add_all(runs)
    db.session.flush()

    root = Log(
        title="Shift summary",
        text="Beam stable, collisions started.",
        author=users[0],
        origin=LogOrigin.HUMAN,
        subtype=LogSubtype.RUN,
        created_at=start,
    )
    root.tags = [tags[1]]
    root.runs = runs[:2]
    root.subsystems = subsystems[:1]
    db.session.add(root)
    db.session.flush()
    root.root_log_id = root.id

    reply = Log(
        title="Re: Shift summary",
        text="TPC reported a trip at 02:14.",
        author=users[1],
        origin=LogOrigin.HUMAN,
        subtype=LogSubtype.COMMENT,
        parent_log_id=root.id,
        root_log_id=root.id,
        created_at=start + timedelta(minutes=30),
    )
    reply.tags = [tags[2]]
    db.session.add(reply)

    announcement = Log(
        title="Maintenance window",
        text="ITS maintenance scheduled for Friday.",
        author=users[0],
        origin=LogOrigin.PROCESS,
        subtype=LogSubtype.ANNOUNCEMENT,
        created_at=start + timedelta(hours=2),
    )
    announcement.tags = [tags[2], tags[3]]
    db.session.add(announcement)
    db.session.flush()
    announcement.root_log_id = announcement.id
    db.session.flush()

    return {
        "users": len(users),
        "tags": len(tags),
        "subsystems": len(subsystems),
        "runs": len(runs),
        "logs": 3,
    }


def register_cli(app: Flask) -> None:
    """注册 CLI 命令."""

    @app.cli.command("init-db")
    def init_db_command() -> None:
        """创建全部数据表(已存在的表保持不变)."""
        db.create_all()
        get_system_logger().info("数据表创建完成", module="cli")
        click.echo("Database tables created.")

    @app.cli.command("seed")
    def seed_command() -> None:
        """写入演示数据."""
        db.create_all()
        counts = seed_demo_data()
        db.session.commit()
        if not counts:
            click.echo("Database already seeded, skipping.")
            return
        get_system_logger().info("演示数据写入完成", module="cli", **counts)
        click.echo("Seeded: " + ", ".join(f"{name}={count}" for name, count in counts.items()))
