"""End-to-end tests for the POST /scrape API."""

import pytest
from aiohttp import web

from config.settings import HTTPConfig, ServerConfig
from scrapers.page_scraper import NO_ARTICLES_MESSAGE
from server.app import create_app


@pytest.fixture
async def site(aiohttp_server, news_page_html, empty_page_html):
    """A local 'news site' serving the fixture pages."""

    async def news(request):
        return web.Response(text=news_page_html, content_type="text/html")

    async def about(request):
        return web.Response(text=empty_page_html, content_type="text/html")

    async def moved(request):
        raise web.HTTPMovedPermanently("/news")

    async def broken(request):
        return web.Response(status=503, text="down")

    app = web.Application()
    app.router.add_get("/news", news)
    app.router.add_get("/about", about)
    app.router.add_get("/moved", moved)
    app.router.add_get("/broken", broken)
    return await aiohttp_server(app)


@pytest.fixture
async def api(aiohttp_client):
    app = create_app(HTTPConfig(total_timeout=5, connect_timeout=2, read_timeout=5), ServerConfig())
    return await aiohttp_client(app)


class TestScrapeEndpoint:
    async def test_returns_articles_in_document_order(self, api, site):
        resp = await api.post("/scrape", json={"url": str(site.make_url("/news"))})

        assert resp.status == 200
        data = await resp.json()
        articles = data["articles"]
        assert [a["headline"] for a in articles] == [
            "Council approves new budget",
            "Local team wins championship",
            "Museum reopens after renovation",
        ]
        assert articles[0] == {
            "headline": "Council approves new budget",
            "author": "Ann Reporter",
            "date": "2021-01-01",
            "source": "127.0.0.1",
            "link": str(site.make_url("/news/budget")),
        }
        assert articles[1]["link"] == "https://example.com/sports/championship"
        assert articles[2]["link"] == str(site.make_url("/museum-reopens"))

    async def test_follows_redirects(self, api, site):
        resp = await api.post("/scrape", json={"url": str(site.make_url("/moved"))})

        assert resp.status == 200
        assert len((await resp.json())["articles"]) == 3

    async def test_missing_url(self, api):
        resp = await api.post("/scrape", json={})

        assert resp.status == 400
        assert await resp.json() == {"error": "URL is required"}

    async def test_body_that_is_not_json(self, api):
        resp = await api.post("/scrape", data="url=https://example.com")

        assert resp.status == 400
        assert await resp.json() == {"error": "URL is required"}

    async def test_malformed_url(self, api):
        resp = await api.post("/scrape", json={"url": "not a url"})

        assert resp.status == 400
        assert await resp.json() == {"error": "Invalid URL format"}

    @pytest.mark.parametrize("url", ["ftp://example.com/file", "mailto:news@example.com", "file:///etc/hosts"])
    async def test_non_http_scheme_is_rejected(self, api, url):
        resp = await api.post("/scrape", json={"url": url})

        assert resp.status == 400
        assert await resp.json() == {"error": "Invalid URL format"}

    async def test_page_without_articles(self, api, site):
        resp = await api.post("/scrape", json={"url": str(site.make_url("/about"))})

        assert resp.status == 404
        assert await resp.json() == {"error": "No articles found", "message": NO_ARTICLES_MESSAGE}

    async def test_upstream_error_status(self, api, site):
        resp = await api.post("/scrape", json={"url": str(site.make_url("/broken"))})

        assert resp.status == 500
        assert await resp.json() == {
            "error": "Failed to scrape the website",
            "message": "Request failed with status code 503",
        }

    async def test_unexpected_failure_is_a_500(self, aiohttp_client, stub_client_factory):
        app = create_app(http_client=stub_client_factory(error=RuntimeError("parser exploded")))
        api = await aiohttp_client(app)

        resp = await api.post("/scrape", json={"url": "https://example.com/news"})

        assert resp.status == 500
        assert await resp.json() == {"error": "Failed to scrape the website", "message": "parser exploded"}

    async def test_injected_client_is_used(self, aiohttp_client, stub_client_factory):
        stub = stub_client_factory(pages={"https://example.com/news": "<article><h2>Hi</h2></article>"})
        api = await aiohttp_client(create_app(http_client=stub))

        resp = await api.post("/scrape", json={"url": "https://example.com/news"})

        assert resp.status == 200
        assert stub.requested == ["https://example.com/news"]
        assert (await resp.json())["articles"][0]["source"] == "example.com"


class TestCorsAndHealth:
    async def test_responses_carry_cors_header(self, api):
        resp = await api.post("/scrape", json={}, headers={"Origin": "http://localhost:3000"})
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    @pytest.mark.parametrize(
        "method, path, status",
        [
            ("GET", "/scrape", 405),
            ("POST", "/no-such-route", 404),
        ],
    )
    async def test_routing_errors_carry_cors_header(self, api, method, path, status):
        resp = await api.request(method, path, headers={"Origin": "http://localhost:3000"})

        assert resp.status == status
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    async def test_preflight(self, api):
        resp = await api.options("/scrape", headers={"Origin": "http://localhost:3000"})
        assert resp.status == 204
        assert "POST" in resp.headers["Access-Control-Allow-Methods"]

    async def test_restricted_origins(self, aiohttp_client, stub_client_factory):
        app = create_app(
            server_config=ServerConfig(cors_origins=["http://allowed.test"]),
            http_client=stub_client_factory(),
        )
        api = await aiohttp_client(app)

        allowed = await api.get("/health", headers={"Origin": "http://allowed.test"})
        other = await api.get("/health", headers={"Origin": "http://other.test"})

        assert allowed.headers["Access-Control-Allow-Origin"] == "http://allowed.test"
        assert "Access-Control-Allow-Origin" not in other.headers

    async def test_health(self, api):
        resp = await api.get("/health")
        assert resp.status == 200
        assert await resp.json() == {"status": "ok"}
