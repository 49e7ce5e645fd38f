"""
CLI 命令：objective-ledger
对持久化的 ledger 执行单次操作
"""
import click
import sys
from pathlib import Path
from typing import Optional

# 添加项目根目录到 sys.path，以便导入 objective_ledger
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from objective_ledger.config_manager import config
from objective_ledger.counter import ManualCounter
from objective_ledger.exceptions import LedgerError
from objective_ledger.ledger import ObjectiveLedger
from objective_ledger.paths import DATA_DIR
from objective_ledger.store import LedgerStore


def _fail(exc: LedgerError) -> None:
    click.echo(f"❌ [{exc.code}] {exc.get_user_message()}", err=True)
    sys.exit(1)


def _run(ctx: click.Context, operation: str, *args) -> None:
    ledger: ObjectiveLedger = ctx.obj["ledger"]
    try:
        message = getattr(ledger, operation)(ctx.obj["participant"], *args)
    except LedgerError as exc:
        _fail(exc)
        return
    click.echo(f"✅ {message}")


@click.group()
@click.option("--participant", "-p", default="", help="调用方身份 (participant id)")
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="ledger 文件路径",
)
@click.option("--height", type=int, default=None, help="固定当前计数器高度 (区块高度)")
@click.pass_context
def ledger(ctx: click.Context, participant: str, store_path: Optional[Path], height: Optional[int]):
    """Objective Ledger 管理命令"""
    path = store_path or DATA_DIR / config.STORE_FILENAME
    try:
        store = LedgerStore(path=path)
    except LedgerError as exc:
        _fail(exc)
        return
    counter = ManualCounter(start=height) if height is not None else None
    ctx.obj = {
        "participant": participant,
        "ledger": ObjectiveLedger(store=store, counter=counter),
    }


@ledger.command()
@click.argument("description")
@click.pass_context
def register(ctx: click.Context, description: str):
    """注册目标"""
    _run(ctx, "register", description)


@ledger.command()
@click.argument("description")
@click.option("--completed/--open", default=False, help="完成状态")
@click.pass_context
def modify(ctx: click.Context, description: str, completed: bool):
    """修改目标描述与完成状态"""
    _run(ctx, "modify", description, completed)


@ledger.command()
@click.pass_context
def terminate(ctx: click.Context):
    """删除目标"""
    _run(ctx, "terminate")


@ledger.command()
@click.argument("weight", type=int)
@click.pass_context
def priority(ctx: click.Context, weight: int):
    """设置优先级权重 (1-3)"""
    _run(ctx, "configure_priority", weight)


@ledger.command()
@click.argument("duration", type=int)
@click.pass_context
def deadline(ctx: click.Context, duration: int):
    """设置截止高度 (当前高度 + duration)"""
    _run(ctx, "establish_deadline", duration)


@ledger.command()
@click.argument("target")
@click.argument("description")
@click.pass_context
def delegate(ctx: click.Context, target: str, description: str):
    """为其他参与者创建目标"""
    _run(ctx, "delegate", target, description)


@ledger.command()
@click.pass_context
def query(ctx: click.Context):
    """查询目标是否存在"""
    result = ctx.obj["ledger"].query(ctx.obj["participant"])
    click.echo(f"exists: {str(result.exists).lower()}")
    click.echo(f"description_length: {result.description_length}")
    click.echo(f"completed: {str(result.completed).lower()}")


@ledger.command()
@click.argument("participant", required=False)
@click.pass_context
def show(ctx: click.Context, participant: Optional[str]):
    """直接查看三张表中的记录"""
    records = ctx.obj["ledger"].lookup(participant or ctx.obj["participant"])
    click.echo(f"participant: {records.participant}")
    if records.objective:
        status = "completed" if records.objective.completed else "open"
        click.echo(f"🎯 objective: {records.objective.description} ({status})")
    else:
        click.echo("🎯 objective: -")
    click.echo(f"⚖️ priority: {records.priority.weight if records.priority else '-'}")
    if records.temporal:
        click.echo(
            f"⏰ deadline: {records.temporal.deadline} "
            f"(alert_activated={str(records.temporal.alert_activated).lower()})"
        )
    else:
        click.echo("⏰ deadline: -")
    if records.is_orphaned:
        click.echo("⚠️ orphaned: priority/deadline rows without an objective")


@ledger.command()
@click.option("--prune", is_flag=True, help="删除孤儿记录")
@click.pass_context
def orphans(ctx: click.Context, prune: bool):
    """列出（或清理）没有目标的 priority/deadline 记录"""
    ledger_obj: ObjectiveLedger = ctx.obj["ledger"]
    found = ledger_obj.prune_orphans() if prune else ledger_obj.orphans()
    if not found:
        click.echo("ℹ️ No orphaned rows")
        return
    verb = "Pruned" if prune else "Found"
    click.echo(f"{verb} {len(found)} orphaned participant(s):")
    for rec in found:
        tables = []
        if rec.priority:
            tables.append("priority")
        if rec.temporal:
            tables.append("deadline")
        click.echo(f"  - {rec.participant}: {', '.join(tables)}")


if __name__ == "__main__":
    ledger()
