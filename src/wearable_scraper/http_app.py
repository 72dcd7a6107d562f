"""FastAPI app: manual trigger surface and catalog read endpoints."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from .domain.errors import InvalidInputError, ScrapeError
from .models.requests import (
    CycleReportOut,
    NotificationOut,
    ProductOut,
    ScheduleRequest,
    ScrapeUrlRequest,
    ScrapeUrlResponse,
    StatusOut,
)
from .services.notifications import NotificationCenter
from .services.scraper_service import ServiceStatus, WearableScraperService
from .utils.validators import is_valid_http_url

# Global app state populated during lifespan startup
app_state: dict = {}

app = FastAPI(title="Wearable AI Scraper", version="0.1.0")


def _service() -> WearableScraperService:
    service = app_state.get("scraper_service")
    if service is None:
        raise HTTPException(status_code=503, detail="scraper_service_unavailable")
    return service


def _notifications() -> NotificationCenter:
    center = app_state.get("notifications")
    if center is None:
        raise HTTPException(status_code=503, detail="notifications_unavailable")
    return center


def _serialize_status(status: ServiceStatus) -> StatusOut:
    return StatusOut(
        cycleState=status.cycle_state.value,
        scheduleArmed=status.schedule_armed,
        intervalHours=status.interval_hours,
        lastScrapeTime=status.last_scrape_time,
        lastReport=CycleReportOut.from_report(status.last_report) if status.last_report else None,
    )


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.post("/api/v1/scrape", response_model=ScrapeUrlResponse)
async def scrape_url(payload: ScrapeUrlRequest):
    url = payload.url.strip()
    if not is_valid_http_url(url):
        raise HTTPException(status_code=400, detail="invalid_url")
    service = _service()
    try:
        result = await service.scrape_one(url)
    except ScrapeError as exc:
        return JSONResponse(
            status_code=502,
            content={"errorCode": exc.code, "url": exc.url, "cause": exc.cause},
        )
    return ScrapeUrlResponse(isNew=result.is_new, product=ProductOut.from_product(result.product))


@app.post("/api/v1/cycles", response_model=CycleReportOut)
async def run_cycle():
    report = await _service().run_cycle()
    if report is None:
        raise HTTPException(status_code=409, detail="cycle_already_running")
    return CycleReportOut.from_report(report)


@app.put("/api/v1/schedule", response_model=StatusOut)
async def configure_schedule(payload: ScheduleRequest):
    service = _service()
    try:
        await service.configure_schedule(payload.intervalHours)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_status(await service.status())


@app.get("/api/v1/status", response_model=StatusOut)
async def status():
    return _serialize_status(await _service().status())


@app.get("/api/v1/products", response_model=list[ProductOut])
async def list_products():
    return [ProductOut.from_product(p) for p in await _service().list_products()]


@app.get("/api/v1/products/{product_id}", response_model=ProductOut)
async def get_product(product_id: str):
    product = await _service().get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="product_not_found")
    return ProductOut.from_product(product)


@app.get("/api/v1/notifications", response_model=list[NotificationOut])
async def list_notifications():
    return [NotificationOut.from_stored(n) for n in await _notifications().recent()]


@app.post("/api/v1/notifications/{notification_id}/read")
async def mark_notification_read(notification_id: str):
    if not await _notifications().mark_read(notification_id):
        raise HTTPException(status_code=404, detail="notification_not_found")
    return {"success": True}


@app.delete("/api/v1/notifications")
async def clear_notifications():
    await _notifications().clear()
    return {"success": True}
