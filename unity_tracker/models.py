from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Phase(str, Enum):
    IDLE = "Idle"
    LOADING = "Loading"
    SUCCESS = "Success"
    FAILED = "Failed"


class AccountInfo(BaseModel):
    """Account snapshot as returned by the explorer's account endpoint.

    Keys missing from the payload stay ``None`` and are left out of
    ``model_fields_set``; defaults for display are applied by the renderer.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    account: Optional[str] = None
    xrp_balance: Optional[Union[str, int, float]] = Field(default=None, alias="xrpBalance")
    # Known accounts come back with an object ({"name": ..., "verified": ...}).
    account_name: Optional[Union[str, Dict[str, Any]]] = Field(
        default=None, alias="accountName"
    )
    sequence: Optional[int] = None


class IdleState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Literal[Phase.IDLE] = Phase.IDLE

    @property
    def result(self) -> Optional[AccountInfo]:
        return None

    @property
    def error_message(self) -> Optional[str]:
        return None


class LoadingState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Literal[Phase.LOADING] = Phase.LOADING

    @property
    def result(self) -> Optional[AccountInfo]:
        return None

    @property
    def error_message(self) -> Optional[str]:
        return None


class SuccessState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Literal[Phase.SUCCESS] = Phase.SUCCESS
    result: AccountInfo

    @property
    def error_message(self) -> Optional[str]:
        return None


class FailedState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Literal[Phase.FAILED] = Phase.FAILED
    error_message: str

    @property
    def result(self) -> Optional[AccountInfo]:
        return None


LookupState = Annotated[
    Union[IdleState, LoadingState, SuccessState, FailedState],
    Field(discriminator="phase"),
]


class ResultPanel(BaseModel):
    model_config = ConfigDict(frozen=True)

    balance: str
    account_name: str
    sequence: str
    account: str


class DisplayFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    busy: bool = False
    result: Optional[ResultPanel] = None
    error: Optional[str] = None


class LookupRequest(BaseModel):
    address: str = ""


class LookupResponse(BaseModel):
    address: str
    state: LookupState
    display: DisplayFields


class AppInfo(BaseModel):
    app_name: str
    tracker_mode: str
    xrpscan_api_url: str
