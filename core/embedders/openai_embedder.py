# Path: core/embedders/openai_embedder.py
# Purpose: Embed text through an OpenAI-compatible embeddings HTTP API.
# Layer: core/embedders.
# Details: One bounded request per call; any transport, status, or shape problem yields None.

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, List, Optional

import aiohttp
import numpy as np

from config.settings import EmbedderSettings

from .base import Embedder

logger = logging.getLogger(__name__)


class OpenAIEmbedder(Embedder):
    """Client for ``POST /v1/embeddings`` returning validated, fixed-dimension vectors."""

    def __init__(self, settings: EmbedderSettings) -> None:
        self.name = "openai"
        self.model_name = settings.model_name
        self.dim = settings.dim
        self.endpoint = settings.endpoint
        self.timeout_seconds = settings.timeout_seconds
        self._api_key = settings.api_key

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def embed(self, text: str) -> Optional[np.ndarray]:
        """
        Request an embedding for ``text``.

        Returns None when the text is blank, no credential is configured, the call
        exceeds the timeout, the response is not 2xx, or the vector is unusable.
        """

        cleaned = self._clean_text(text)
        if not cleaned or not self._api_key:
            return None

        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}
        body = {"model": self.model_name, "input": cleaned}
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)) as session:
                async with session.post(self.endpoint, json=body, headers=headers) as resp:
                    if resp.status < 200 or resp.status >= 300:
                        logger.warning("Embedding request failed with status %d", resp.status)
                        return None
                    payload = await resp.json(content_type=None)
        except asyncio.TimeoutError:
            logger.warning("Embedding request timed out after %.1fs", self.timeout_seconds)
            return None
        except (aiohttp.ClientError, ValueError) as exc:
            logger.warning("Embedding request failed: %s", exc)
            return None

        return self._parse_embedding(payload)

    def _parse_embedding(self, payload: Any) -> Optional[np.ndarray]:
        """Validate ``data[0].embedding`` and coerce it into a finite float vector of ``dim`` values."""

        if not isinstance(payload, dict):
            logger.warning("Embedding response is not a JSON object")
            return None
        data = payload.get("data")
        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            logger.warning("Embedding response has no result objects")
            return None
        raw = data[0].get("embedding")
        if not isinstance(raw, list) or not raw:
            logger.warning("Embedding response has no usable vector")
            return None

        values: List[float] = []
        for item in raw:
            try:
                value = float(item)
            except (TypeError, ValueError, OverflowError):
                continue
            if math.isfinite(value):
                values.append(value)

        if len(values) != self.dim:
            logger.warning("Embedding has %d usable values, expected %d", len(values), self.dim)
            return None
        return np.asarray(values, dtype=np.float64)
