from typing import Any, Dict

from fastapi import APIRouter

from version_gate import __version__
from version_gate.core.config import settings
from version_gate.core.runtime import version_source_for

router = APIRouter()


def get_version_payload() -> Dict[str, Any]:
    return {
        'version': version_source_for(settings).current_version_string(),
        'server_version': __version__,
    }


@router.get('/version')
async def version():
    return get_version_payload()
