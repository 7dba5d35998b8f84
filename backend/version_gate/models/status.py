from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import AnyUrl, BaseModel, ConfigDict, Field


class GateStatusKind(str, enum.Enum):
    up_to_date = 'up_to_date'
    recommended_update = 'recommended_update'
    required_update = 'required_update'
    end_of_life = 'end_of_life'


class _StatusBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class UpToDate(_StatusBase):
    kind: Literal[GateStatusKind.up_to_date] = GateStatusKind.up_to_date


class RecommendedUpdate(_StatusBase):
    kind: Literal[GateStatusKind.recommended_update] = GateStatusKind.recommended_update
    url: AnyUrl


class RequiredUpdate(_StatusBase):
    kind: Literal[GateStatusKind.required_update] = GateStatusKind.required_update
    url: AnyUrl


class EndOfLife(_StatusBase):
    kind: Literal[GateStatusKind.end_of_life] = GateStatusKind.end_of_life
    message: Optional[str] = None


# Closed set: no other gate states exist.
GateStatus = Annotated[
    Union[UpToDate, RecommendedUpdate, RequiredUpdate, EndOfLife],
    Field(discriminator='kind'),
]


def status_payload(status: GateStatus | None) -> dict | None:
    if status is None:
        return None
    return status.model_dump(mode='json')
