from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from .config import settings
from .logging_config import setup_logging
from .models import AccountInfo, AppInfo, LookupRequest, LookupResponse
from .render import render
from .state import LookupWidget
from .xrpscan_service import InvalidResponseError, NetworkError, XrpscanService


STATIC_DIR = Path(__file__).resolve().parent / "static"

logger = setup_logging(settings)
xrpscan_service = XrpscanService(settings)

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


def get_service() -> XrpscanService:
    return xrpscan_service


@app.on_event("startup")
async def startup() -> None:
    logger.info(
        "%s started (mode=%s, api=%s)",
        settings.app_name,
        settings.tracker_mode,
        settings.xrpscan_api_url,
    )


@app.on_event("shutdown")
async def shutdown() -> None:
    await xrpscan_service.aclose()


@app.get("/", response_class=HTMLResponse)
async def root() -> str:
    return (STATIC_DIR / "index.html").read_text(encoding="utf-8")


@app.get("/api/info", response_model=AppInfo)
async def info() -> AppInfo:
    return AppInfo(
        app_name=settings.app_name,
        tracker_mode=settings.tracker_mode,
        xrpscan_api_url=settings.xrpscan_api_url,
    )


@app.post("/api/lookup", response_model=LookupResponse)
async def lookup(
    payload: LookupRequest, service: XrpscanService = Depends(get_service)
) -> LookupResponse:
    widget = LookupWidget(service)
    widget.set_address(payload.address)
    state = await widget.submit()
    return LookupResponse(address=widget.address, state=state, display=render(state))


@app.get("/api/account/{address}", response_model=AccountInfo, response_model_exclude_unset=True)
async def account(address: str, service: XrpscanService = Depends(get_service)) -> AccountInfo:
    try:
        return await service.fetch_account(address)
    except InvalidResponseError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except NetworkError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
