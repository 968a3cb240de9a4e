"""
advice.py — Tactical advice text from a generative model.

AdviceClient talks to the Gemini REST API and never raises: any failure
collapses into the fixed fallback line. AdviceService runs the client in
a background thread and keeps only the answer to the most recent request;
older answers arriving late are dropped.
"""

import json
import logging
import threading
import urllib.error
import urllib.request
from typing import Callable, Optional

from .config import (
    ADVICE_API_KEY, ADVICE_MODEL, ADVICE_ENDPOINT, ADVICE_TIMEOUT,
    ADVICE_FALLBACK, ADVICE_IDLE,
)

log = logging.getLogger(__name__)

PROMPT = (
    "Current Score: {score}. Difficulty: {difficulty}. "
    "Act as the AG~3 OS tactical interface. Provide a one-sentence, gritty, "
    "cyberpunk-style status update or tactical advice. Keep it under 15 words."
)

Transport = Callable[[str, dict, float], dict]


class AdviceFetchFailed(RuntimeError):
    """The advice generator could not produce any text."""


def _post_json(url: str, body: dict, timeout: float) -> dict:
    data = json.dumps(body).encode("utf-8")
    req = urllib.request.Request(
        url, data=data, method="POST",
        headers={"Content-Type": "application/json"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return json.loads(resp.read().decode("utf-8") or "{}")
    except urllib.error.HTTPError as e:
        detail = e.read().decode("utf-8", errors="ignore")
        raise AdviceFetchFailed(f"HTTPError {e.code}: {detail}") from e
    except (urllib.error.URLError, OSError, ValueError) as e:
        raise AdviceFetchFailed(f"request failed: {e}") from e


# ─────────────────────────── AdviceClient ────────────────────────
class AdviceClient:
    def __init__(
        self,
        api_key: str = ADVICE_API_KEY,
        model: str = ADVICE_MODEL,
        endpoint: str = ADVICE_ENDPOINT,
        transport: Transport = _post_json,
        timeout: float = ADVICE_TIMEOUT,
    ):
        self.api_key = api_key
        self.model = model
        self.endpoint = endpoint
        self.transport = transport
        self.timeout = timeout

    def fetch_advice(self, score: int, difficulty: str) -> str:
        """One short line of advice, or ADVICE_FALLBACK on any failure."""
        try:
            return self._generate(PROMPT.format(score=score, difficulty=difficulty))
        except AdviceFetchFailed as exc:
            log.warning("advice generator failed: %s", exc)
            return ADVICE_FALLBACK

    def _generate(self, prompt: str) -> str:
        if not self.api_key:
            raise AdviceFetchFailed("no API key configured")
        url = f"{self.endpoint}/models/{self.model}:generateContent?key={self.api_key}"
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.9},
        }
        payload = self.transport(url, body, self.timeout)
        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AdviceFetchFailed(f"unexpected response shape: {exc!r}") from exc
        text = str(text).strip()
        if not text:
            raise AdviceFetchFailed("empty response")
        return text


def _spawn_thread(work: Callable[[], None]) -> None:
    threading.Thread(target=work, daemon=True).start()


# ─────────────────────────── AdviceService ───────────────────────
class AdviceService:
    """
    Fire-and-forget requests tagged with a monotonically increasing id.

    Only the answer whose id matches the latest issued request is kept;
    the main loop reads it through `text`.
    """

    def __init__(
        self,
        client: Optional[AdviceClient] = None,
        runner: Callable[[Callable[[], None]], None] = _spawn_thread,
        initial: str = ADVICE_IDLE,
    ):
        self.client = client or AdviceClient()
        self.runner = runner
        self._lock = threading.Lock()
        self._latest_id: int = 0
        self._text: str = initial

    @property
    def text(self) -> str:
        with self._lock:
            return self._text

    @property
    def latest_id(self) -> int:
        return self._latest_id

    def set_text(self, text: str) -> None:
        """Replace the text and invalidate every outstanding request."""
        with self._lock:
            self._latest_id += 1
            self._text = text

    def request(self, score: int, difficulty: str) -> int:
        with self._lock:
            self._latest_id += 1
            request_id = self._latest_id

        def _worker() -> None:
            self.deliver(request_id, self.client.fetch_advice(score, difficulty))

        self.runner(_worker)
        return request_id

    def deliver(self, request_id: int, text: str) -> bool:
        """Store `text` if it answers the latest request. False if stale."""
        with self._lock:
            if request_id != self._latest_id:
                log.debug("dropping stale advice #%d (latest #%d)", request_id, self._latest_id)
                return False
            self._text = text
            return True
