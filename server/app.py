# File: server/app.py
"""aiohttp application exposing the scraper as ``POST /scrape``"""
import json
from typing import List, Optional

from aiohttp import web

from config.settings import HTTPConfig, ServerConfig
from core.exceptions import NotFoundError, ScraperError, ValidationError
from scrapers.page_scraper import PageScraper
from utils.http_client import AsyncHTTPClient
from utils.logger import get_logger

logger = get_logger(__name__)

SCRAPER_KEY = web.AppKey('scraper', PageScraper)
CORS_ORIGINS_KEY = web.AppKey('cors_origins', list)

SCRAPE_FAILED_ERROR = "Failed to scrape the website"


def _cors_headers(origin: Optional[str], allowed: List[str]) -> dict:
    if '*' in allowed:
        allow_origin = '*'
    elif origin and origin in allowed:
        allow_origin = origin
    else:
        return {}
    return {
        'Access-Control-Allow-Origin': allow_origin,
        'Access-Control-Allow-Methods': 'GET, POST, OPTIONS',
        'Access-Control-Allow-Headers': 'Content-Type',
    }


@web.middleware
async def cors_middleware(request: web.Request, handler):
    """Answer pre-flight requests and tag responses with CORS headers"""
    headers = _cors_headers(request.headers.get('Origin'), request.app[CORS_ORIGINS_KEY])

    if request.method == 'OPTIONS':
        response = web.Response(status=204)
    else:
        try:
            response = await handler(request)
        except web.HTTPException as ex:
            # Routing errors (404, 405) are raised rather than returned
            ex.headers.update(headers)
            raise

    response.headers.update(headers)
    return response


async def handle_scrape(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    url = body.get('url') if isinstance(body, dict) else None
    scraper = request.app[SCRAPER_KEY]

    try:
        articles = await scraper.scrape_url(url)
    except ValidationError as e:
        return web.json_response({'error': str(e)}, status=400)
    except NotFoundError as e:
        return web.json_response({'error': e.error, 'message': e.message}, status=404)
    except ScraperError as e:
        logger.error(f"Scraping error for {url}: {e}")
        return web.json_response({'error': SCRAPE_FAILED_ERROR, 'message': str(e)}, status=500)
    except Exception as e:
        logger.exception(f"Unexpected error scraping {url}: {e}")
        return web.json_response({'error': SCRAPE_FAILED_ERROR, 'message': str(e)}, status=500)

    return web.json_response({'articles': [article.to_dict() for article in articles]})


async def handle_health(request: web.Request) -> web.Response:
    return web.json_response({'status': 'ok'})


def create_app(http_config: HTTPConfig = None,
               server_config: ServerConfig = None,
               http_client: AsyncHTTPClient = None) -> web.Application:
    """Build the application.

    The HTTP client is opened on startup and closed on cleanup. Pass an
    ``http_client`` to share one that the caller manages.
    """
    server_config = server_config or ServerConfig()

    app = web.Application(middlewares=[cors_middleware])
    app[CORS_ORIGINS_KEY] = list(server_config.cors_origins)

    async def scraper_ctx(app: web.Application):
        owns_client = http_client is None
        client = http_client or AsyncHTTPClient(http_config)
        if owns_client:
            await client.open()
        app[SCRAPER_KEY] = PageScraper(client)
        logger.info("Scraper HTTP client ready")
        yield
        if owns_client:
            await client.close()

    app.cleanup_ctx.append(scraper_ctx)
    app.router.add_post('/scrape', handle_scrape)
    app.router.add_get('/health', handle_health)
    return app


def run_server(http_config: HTTPConfig, server_config: ServerConfig):
    app = create_app(http_config, server_config)
    logger.info(f"Server running on {server_config.host}:{server_config.port}")
    web.run_app(app, host=server_config.host, port=server_config.port, print=None)
