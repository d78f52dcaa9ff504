"""Tests for the command-line application wrapper."""

import csv
import json
from pathlib import Path

import pytest
from aiohttp import web

from core.exceptions import ScraperError
from core.models import SortMode
from main import NewsScraperApp

CONFIG_PATH = str(Path(__file__).parents[1] / "news_scraper_config.yaml")


@pytest.fixture
async def site(aiohttp_server, news_page_html):
    async def news(request):
        return web.Response(text=news_page_html, content_type="text/html")

    app = web.Application()
    app.router.add_get("/news", news)
    return await aiohttp_server(app)


@pytest.fixture
def app():
    return NewsScraperApp(CONFIG_PATH)


class TestNewsScraperApp:
    async def test_scrape_applies_sort_and_filters(self, app, site):
        articles = await app.scrape(str(site.make_url("/news")), SortMode.NEWEST_FIRST, ["budget", "team"])

        assert [a.headline for a in articles] == ["Local team wins championship", "Council approves new budget"]

    async def test_scrape_failure_raises(self, app, site):
        with pytest.raises(ScraperError, match="status code 404"):
            await app.scrape(str(site.make_url("/missing-page")), SortMode.NEWEST_FIRST, [])

    async def test_export_json(self, app, site, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        filename = await app.export_data(str(site.make_url("/news")), "json")

        data = json.loads((tmp_path / filename).read_text(encoding="utf-8"))
        assert filename == "news_export_127.0.0.1.json"
        assert len(data["articles"]) == 3

    async def test_export_csv(self, app, site, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        filename = await app.export_data(str(site.make_url("/news")), "csv")

        with open(tmp_path / filename, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [row["headline"] for row in rows][0] == "Local team wins championship"
        assert set(rows[0]) == {"headline", "author", "date", "source", "link"}

    async def test_export_unknown_format(self, app, site):
        assert await app.export_data(str(site.make_url("/news")), "xml") is None

    async def test_rank_export_reorders_saved_articles(self, app, site, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        filename = await app.export_data(str(site.make_url("/news")), "json")

        ranked = app.rank_export(filename, SortMode.OLDEST_FIRST, ["budget", "museum"])

        assert [a.headline for a in ranked] == ["Museum reopens after renovation", "Council approves new budget"]


class TestRankExport:
    def write_export(self, tmp_path, articles):
        path = tmp_path / "export.json"
        path.write_text(json.dumps({"articles": articles}), encoding="utf-8")
        return str(path)

    def test_missing_fields_get_defaults(self, app, tmp_path, capsys):
        filename = self.write_export(tmp_path, [{"headline": "Saved story", "link": "https://a.com/s", "author": ""}])

        [article] = app.rank_export(filename, SortMode.NEWEST_FIRST, [])

        assert article.author == "Unknown"
        assert article.date == "Not available"
        assert "By Unknown" in capsys.readouterr().out

    def test_missing_file(self, app, tmp_path):
        with pytest.raises(ScraperError, match="not found"):
            app.rank_export(str(tmp_path / "nope.json"), SortMode.NEWEST_FIRST, [])

    @pytest.mark.parametrize(
        "articles",
        [
            [{"headline": "   ", "link": "https://a.com/blank"}],
            [{"link": "https://a.com/no-headline"}],
        ],
    )
    def test_invalid_entries(self, app, tmp_path, articles):
        with pytest.raises(ScraperError, match="Invalid export file"):
            app.rank_export(self.write_export(tmp_path, articles), SortMode.NEWEST_FIRST, [])
