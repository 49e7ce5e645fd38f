from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Header, HTTPException
from pydantic import BaseModel, StrictBool, StrictInt, StrictStr

from objective_ledger.exceptions import LedgerError
from objective_ledger.ledger import ObjectiveLedger

router = APIRouter()

_ledger: Optional[ObjectiveLedger] = None


def get_ledger() -> ObjectiveLedger:
    global _ledger
    if _ledger is None:
        _ledger = ObjectiveLedger()
    return _ledger


class RegisterRequest(BaseModel):
    description: StrictStr


class ModifyRequest(BaseModel):
    description: StrictStr
    completed: StrictBool


class PriorityRequest(BaseModel):
    weight: StrictInt


class DeadlineRequest(BaseModel):
    duration: StrictInt


class DelegateRequest(BaseModel):
    target: StrictStr
    description: StrictStr


def _caller(x_participant_id: Optional[str]) -> str:
    if not x_participant_id or not x_participant_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-Participant-Id header")
    return x_participant_id.strip()


def _call(operation, *args):
    try:
        message = operation(*args)
    except LedgerError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.to_dict())
    return {"success": True, "message": message}


@router.get("/")
def query_objective(x_participant_id: Optional[str] = Header(default=None)):
    caller = _caller(x_participant_id)
    return asdict(get_ledger().query(caller))


@router.post("/", status_code=201)
def register_objective(
    req: RegisterRequest, x_participant_id: Optional[str] = Header(default=None)
):
    return _call(get_ledger().register, _caller(x_participant_id), req.description)


@router.put("/")
def modify_objective(req: ModifyRequest, x_participant_id: Optional[str] = Header(default=None)):
    return _call(
        get_ledger().modify, _caller(x_participant_id), req.description, req.completed
    )


@router.delete("/")
def terminate_objective(x_participant_id: Optional[str] = Header(default=None)):
    return _call(get_ledger().terminate, _caller(x_participant_id))


@router.put("/priority")
def configure_priority(
    req: PriorityRequest, x_participant_id: Optional[str] = Header(default=None)
):
    return _call(get_ledger().configure_priority, _caller(x_participant_id), req.weight)


@router.put("/deadline")
def establish_deadline(
    req: DeadlineRequest, x_participant_id: Optional[str] = Header(default=None)
):
    return _call(get_ledger().establish_deadline, _caller(x_participant_id), req.duration)


@router.post("/delegate", status_code=201)
def delegate_objective(
    req: DelegateRequest, x_participant_id: Optional[str] = Header(default=None)
):
    """
    委派目标：任何调用方都可以为任意参与者创建目标（无授权校验）。
    """
    return _call(get_ledger().delegate, _caller(x_participant_id), req.target, req.description)


@router.get("/{participant}/records")
def participant_records(participant: str):
    """Direct table lookup; shows priority/temporal rows even without an objective."""
    records = get_ledger().lookup(participant)
    payload = asdict(records)
    payload["orphaned"] = records.is_orphaned
    return payload
