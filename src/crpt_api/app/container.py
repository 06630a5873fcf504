from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..config.urls import get_documents_url
from ..core.domain.enums import TimeUnit
from ..core.usecases.create_document import CreateDocumentUseCase
from ..infra.http_transport import HttpxTransport
from ..infra.rate_limiter import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


def rate_limiter_resource(request_limit, window_count, window_unit):
	"""One limiter per container; its ticker thread is stopped on shutdown."""
	limiter = FixedWindowRateLimiter.per(TimeUnit(window_unit), request_limit=request_limit, count=window_count)
	try:
		yield limiter
	finally:
		logger.debug("Closing rate limiter")
		limiter.close()


def transport_resource(connect_timeout_seconds, read_timeout_seconds):
	logger.info("Initializing HTTP transport")
	transport = HttpxTransport(
		timeout_seconds=read_timeout_seconds,
		connect_timeout_seconds=connect_timeout_seconds,
	)
	try:
		yield transport
	finally:
		logger.debug("Closing HTTP transport")
		transport.close()


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	rate_limiter = providers.Resource(
		rate_limiter_resource,
		request_limit=config.request_limit,
		window_count=config.window_count,
		window_unit=config.window_unit,
	)

	transport = providers.Resource(
		transport_resource,
		connect_timeout_seconds=config.connect_timeout_seconds,
		read_timeout_seconds=config.read_timeout_seconds,
	)

	documents_url = providers.Callable(get_documents_url, config.base_url)

	create_document_uc = providers.Factory(
		CreateDocumentUseCase,
		rate_limiter=rate_limiter,
		transport=transport,
		url=documents_url,
		user_agent=config.user_agent,
	)
