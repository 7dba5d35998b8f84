from typing import Any, Dict

from fastapi import APIRouter, Depends

from version_gate.core.runtime import get_controller
from version_gate.gate.controller import VersionGateController
from version_gate.models.status import status_payload

router = APIRouter(prefix='/gate', tags=['gate'])


def gate_payload(controller: VersionGateController) -> Dict[str, Any]:
    descriptor = controller.descriptor
    return {
        'status': status_payload(controller.status),
        'descriptor': descriptor.to_wire() if descriptor is not None else None,
        'is_loading': controller.is_loading,
    }


@router.get('')
async def gate_state(controller: VersionGateController = Depends(get_controller)):
    return gate_payload(controller)


@router.post('/refresh')
async def gate_refresh(controller: VersionGateController = Depends(get_controller)):
    """Unconditional re-check; failures fail open and never surface as errors."""
    await controller.refresh()
    return gate_payload(controller)


@router.post('/refresh-if-needed')
async def gate_refresh_if_needed(controller: VersionGateController = Depends(get_controller)):
    refreshed = await controller.refresh_if_needed()
    return {**gate_payload(controller), 'refreshed': refreshed}


@router.post('/dismiss')
async def gate_dismiss(controller: VersionGateController = Depends(get_controller)):
    dismissed = controller.dismiss_recommendation()
    return {**gate_payload(controller), 'dismissed': dismissed}
