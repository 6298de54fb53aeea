# cart_service/api/routers/health.py
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "healthy"}


@router.get("/ready")
def ready(request: Request):
    if request.app.state.cart_repo.ping():
        return {"status": "ready"}
    return JSONResponse(status_code=503, content={"status": "not ready"})
