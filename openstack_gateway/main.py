import logging

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from openstack_gateway.config.settings import settings
from openstack_gateway.core.errors import (
    RequestValidationError,
    TransportError,
    UpstreamError,
)
from openstack_gateway.core.openstack.bootstrap import BootstrapResult
from openstack_gateway.core.openstack.client import OpenStackClient, bootstrap_from_file
from openstack_gateway.core.openstack.invoker import GenericInvoker
from openstack_gateway.models.session import Session
from openstack_gateway.routes import images, limits, metrics, servers, tenants

load_dotenv()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="OpenStack Gateway", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 부트스트랩 전에도 라우트가 "없음" 응답을 줄 수 있도록 빈 세션으로 시작
app.state.http = httpx.AsyncClient(timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS))
app.state.openstack_client = OpenStackClient(Session.unauthenticated(), GenericInvoker(app.state.http))


@app.get("/health")
def health(request: Request) -> dict:
    return {"status": "ok", "connected": request.app.state.openstack_client.is_connected()}


app.include_router(servers.router, prefix="/servers", tags=["servers"])
app.include_router(images.router, prefix="/images", tags=["images"])
app.include_router(metrics.router, prefix="/metrics", tags=["metrics"])
app.include_router(limits.router, prefix="/limits", tags=["limits"])
app.include_router(tenants.router, prefix="/tenants", tags=["tenants"])


@app.on_event("startup")
async def _bootstrap_openstack() -> None:
    """
    clouds.yaml 로 Keystone 토큰을 발급받고 서비스 URL 을 해석한다.

    설정 오류 / 인증 실패는 이 프로세스에서 복구할 수 없으므로 종료한다.
    (토큰 갱신은 하지 않는다. 재인증하려면 프로세스를 재시작한다.)
    """
    invoker = app.state.openstack_client.invoker

    result: BootstrapResult = await bootstrap_from_file(
        settings.OS_CLIENT_CONFIG_FILE, settings.OS_CLOUD, invoker
    )
    if not result.ok:
        await app.state.http.aclose()
        logger.critical("OpenStack bootstrap failed for cloud '%s': %s", settings.OS_CLOUD, result.error)
        raise SystemExit(1)

    app.state.openstack_client = OpenStackClient(result.session, invoker)


@app.on_event("shutdown")
async def _close_http() -> None:
    await app.state.http.aclose()


@app.exception_handler(UpstreamError)
async def upstream_ex(request: Request, exc: UpstreamError):
    # 업스트림 상태 코드를 그대로 전달
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc), "body": exc.body})


@app.exception_handler(RequestValidationError)
async def request_validation_ex(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(TransportError)
async def transport_ex(request: Request, exc: TransportError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_ex(request: Request, exc: Exception):
    # 전역 예외 처리: JSON 형태로 에러를 반환
    return JSONResponse(status_code=500, content={"detail": str(exc)})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, reload=False)
