from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from wearable_scraper.domain.errors import FetchError
from wearable_scraper.http_app import app, app_state
from wearable_scraper.scraping.page_fetcher import FetchedPage
from wearable_scraper.services.markup_extractor import MarkupExtractor
from wearable_scraper.services.notifications import NotificationCenter
from wearable_scraper.services.schedule_controller import ScheduleController
from wearable_scraper.services.scrape_orchestrator import ScrapeOrchestrator
from wearable_scraper.services.scraper_service import WearableScraperService
from wearable_scraper.services.text_classifier import TextClassifier
from wearable_scraper.storage.memory import InMemoryCatalogStore

WATCH_URL = "https://www.apple.com/apple-watch-ultra/"
WATCH_PAGE = """
<html>
  <head><title>Apple Watch Ultra</title><meta name="description" content="Rugged smartwatch"></head>
  <body><h1>Apple Watch Ultra</h1><h2>GPS</h2><p>Heart rate, GPS and up to 36 hours of battery life. $799</p></body>
</html>
"""


class StaticFetcher:
    def __init__(self, pages: dict[str, str]):
        self.pages = pages

    async def fetch(self, url: str) -> FetchedPage:
        if url not in self.pages:
            raise FetchError(url, "HTTP 404")
        return FetchedPage(url=url, html=self.pages[url], status=200)


@pytest.fixture
def store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore()


@pytest.fixture
def client(store: InMemoryCatalogStore):
    notifications = NotificationCenter(store)
    orchestrator = ScrapeOrchestrator(
        fetcher=StaticFetcher({WATCH_URL: WATCH_PAGE}),
        extractor=MarkupExtractor(),
        classifier=TextClassifier(),
        store=store,
        notifier=notifications,
        news_sites=(),
        product_sites=(),
    )
    schedule = ScheduleController(orchestrator.run_cycle, startup_delay_seconds=0)
    app_state["scraper_service"] = WearableScraperService(orchestrator=orchestrator, schedule=schedule, store=store)
    app_state["notifications"] = notifications
    with TestClient(app) as c:
        yield c
    app_state.clear()


def test_healthz(client: TestClient) -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_scrape_url_insert_then_update(client: TestClient) -> None:
    first = client.post("/api/v1/scrape", json={"url": WATCH_URL})
    assert first.status_code == 200
    body = first.json()
    assert body["isNew"] is True
    product = body["product"]
    assert product["title"] == "Apple Watch Ultra"
    assert product["category"] == "Smartwatch"
    assert product["bodyPlacement"] == "Wrist-Worn"
    assert product["price"] == "$799"
    assert product["headings"] == ["Apple Watch Ultra", "GPS"]

    second = client.post("/api/v1/scrape", json={"url": WATCH_URL})
    assert second.json()["isNew"] is False
    assert second.json()["product"]["id"] == product["id"]

    listed = client.get("/api/v1/products").json()
    assert [p["id"] for p in listed] == [product["id"]]
    assert client.get(f"/api/v1/products/{product['id']}").status_code == 200


def test_scrape_url_failure_reports_url_and_cause(client: TestClient) -> None:
    resp = client.post("/api/v1/scrape", json={"url": "https://gone.example/"})
    assert resp.status_code == 502
    assert resp.json() == {"errorCode": "FETCH_FAILED", "url": "https://gone.example/", "cause": "HTTP 404"}


def test_scrape_url_rejects_non_http(client: TestClient) -> None:
    resp = client.post("/api/v1/scrape", json={"url": "ftp://example.com/file"})
    assert resp.status_code == 400


def test_unknown_product_is_404(client: TestClient) -> None:
    assert client.get("/api/v1/products/product-missing").status_code == 404


def test_run_cycle_and_status(client: TestClient) -> None:
    resp = client.post("/api/v1/cycles")
    assert resp.status_code == 200
    assert resp.json()["sitesTotal"] == 0

    status = client.get("/api/v1/status").json()
    assert status["cycleState"] == "IDLE"
    assert status["lastReport"]["sitesTotal"] == 0
    assert status["lastScrapeTime"] is not None


def test_schedule_disable_and_reject_negative(client: TestClient) -> None:
    resp = client.put("/api/v1/schedule", json={"intervalHours": 0})
    assert resp.status_code == 200
    assert resp.json()["scheduleArmed"] is False
    assert resp.json()["intervalHours"] == 0.0

    assert client.put("/api/v1/schedule", json={"intervalHours": -3}).status_code == 400


@pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
def test_schedule_rejects_non_finite_interval(client: TestClient, store: InMemoryCatalogStore, token: str) -> None:
    resp = client.put(
        "/api/v1/schedule",
        content='{"intervalHours": ' + token + "}",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert store._settings.auto_scrape_interval_hours == 24.0


def test_notifications_flow(client: TestClient, store: InMemoryCatalogStore) -> None:
    client.post("/api/v1/scrape", json={"url": WATCH_URL})

    items = client.get("/api/v1/notifications").json()
    assert len(items) == 1
    assert items[0]["title"] == "New Wearable AI Product Added"
    assert items[0]["message"] == "Added Apple Watch Ultra to the database"

    assert client.post(f"/api/v1/notifications/{items[0]['id']}/read").status_code == 200
    assert client.get("/api/v1/notifications").json()[0]["read"] is True
    assert client.post("/api/v1/notifications/notification-missing/read").status_code == 404

    assert client.delete("/api/v1/notifications").status_code == 200
    assert client.get("/api/v1/notifications").json() == []
    assert store._notifications == []


def test_service_unavailable_without_state() -> None:
    app_state.clear()
    with TestClient(app) as c:
        assert c.get("/api/v1/status").status_code == 503
