"""FastAPI application entrypoint for repomancer service mode."""

from __future__ import annotations

from typing import Any, Callable, Dict, Literal, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from ..assembler import ProfileAssembler
from ..config import ConfigError, RepoMancerConfig, load_config
from ..errors import AccessDenied, InvalidLocator, ProviderError, RepositoryNotFound
from ..logging import get_logger
from ..report import ReportRenderer

logger = get_logger("service")


class AnalyzeRequest(BaseModel):
    locator: str
    token: Optional[str] = None


class ReportRequest(AnalyzeRequest):
    format: Literal["markdown", "json"] = "markdown"


class HealthResponse(BaseModel):
    status: str


AssemblerFactory = Callable[[Optional[str]], ProfileAssembler]


_ERROR_STATUS = (
    (InvalidLocator, 400),
    (AccessDenied, 403),
    (RepositoryNotFound, 404),
    (ProviderError, 502),
    (ConfigError, 500),
)


def create_app(
    assembler_factory: AssemblerFactory | None = None,
    renderer: ReportRenderer | None = None,
    *,
    config: RepoMancerConfig | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing repository analysis.

    Configuration is read once here, not per request. When both an assembler
    factory and a renderer are supplied, no configuration is loaded at all.
    """

    settings = config
    if settings is None and (assembler_factory is None or renderer is None):
        settings = load_config()

    def config_assembler(token: Optional[str]) -> ProfileAssembler:
        return ProfileAssembler.from_config(settings, token=token)

    factory_impl: AssemblerFactory = assembler_factory or config_assembler
    report_renderer = renderer or ReportRenderer(settings.report.templates_dir)

    app = FastAPI(title="RepoMancer Service", version="0.1.0")

    def get_factory() -> AssemblerFactory:
        return factory_impl

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze")
    async def analyze(
        payload: AnalyzeRequest,
        factory: AssemblerFactory = Depends(get_factory),
    ) -> Dict[str, Any]:
        profile = await factory(payload.token).analyze(payload.locator)
        return profile.to_dict()

    @app.post("/report", response_class=PlainTextResponse)
    async def report(
        payload: ReportRequest,
        factory: AssemblerFactory = Depends(get_factory),
    ) -> PlainTextResponse:
        profile = await factory(payload.token).analyze(payload.locator)
        media_type = "application/json" if payload.format == "json" else "text/markdown"
        return PlainTextResponse(
            report_renderer.render(profile, payload.format), media_type=media_type
        )

    @app.exception_handler(InvalidLocator)
    @app.exception_handler(ProviderError)
    @app.exception_handler(ConfigError)
    async def analysis_error_handler(_: Any, exc: Exception) -> JSONResponse:
        status = next(code for kind, code in _ERROR_STATUS if isinstance(exc, kind))
        if status >= 500:
            logger.warning("Request failed with %s: %s", status, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    return app


def run_service(
    config: RepoMancerConfig | None = None, host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(config=config), host=host, port=port)
