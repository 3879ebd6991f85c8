# -----------------------------------------------------------------------------
# reCAPTCHA v3 verification for message submissions.
#
# The browser obtains a token from Google and sends it with the message; we
# forward it, together with our secret key, to the `siteverify` endpoint and
# accept the submission when Google reports success with a high enough score.
#
# Like the rest of the project's outbound HTTP, this uses only
# `urllib.request`. Unit tests patch `RecaptchaVerifier._post` so that no
# real network call is made.
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from flagbook.core.settings import get_logger, load_settings

VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"

logger = get_logger(__name__)


class RecaptchaError(Exception):
    """Raised when a submission fails bot verification.

    ``missing_token`` is a client mistake (400); ``rejected`` means Google
    did not vouch for the client (403).
    """

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


@dataclass(slots=True)
class RecaptchaVerifier:
    """Verify reCAPTCHA v3 tokens against Google's ``siteverify`` API.

    Parameters
    ----------
    secret_key:
        Server-side secret. When ``None`` every submission is accepted.
    min_score:
        Lowest v3 score treated as human.
    timeout_seconds:
        Network timeout for the verification request.
    """

    secret_key: str | None
    min_score: float = 0.5
    timeout_seconds: float = 10.0

    @classmethod
    def from_settings(cls) -> RecaptchaVerifier:
        s = load_settings()
        return cls(
            secret_key=s.recaptcha_secret_key if s.recaptcha_enabled else None,
            min_score=s.recaptcha_min_score,
        )

    @property
    def enabled(self) -> bool:
        return self.secret_key is not None

    def verify(self, token: str | None) -> None:
        """Check ``token``; return silently when the client passes.

        Raises
        ------
        RecaptchaError
            ``missing_token`` or ``rejected``.
        """
        if not self.enabled:
            return
        if not token:
            raise RecaptchaError("missing_token")

        data = self._post(url=VERIFY_URL, form={"secret": self.secret_key or "", "response": token})
        success = bool(data.get("success"))
        score = float(data.get("score") or 0.0)
        if not success or score < self.min_score:
            logger.info("reCAPTCHA rejected submission (success=%s, score=%.2f)", success, score)
            raise RecaptchaError("rejected")

    def _post(self, *, url: str, form: Mapping[str, str]) -> dict[str, Any]:
        """POST ``form`` url-encoded and decode the JSON reply.

        Network and decoding failures are logged and treated as a failed
        verification rather than a server error.
        """
        body = urllib.parse.urlencode(form).encode("utf-8")
        request = urllib.request.Request(
            url=url,
            data=body,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            method="POST",
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
            decoded: dict[str, Any] = json.loads(raw.decode("utf-8"))
        except (urllib.error.URLError, TimeoutError, json.JSONDecodeError) as exc:
            logger.error("reCAPTCHA verification request failed: %s", exc)
            return {"success": False}

        return decoded


def get_recaptcha_verifier() -> RecaptchaVerifier:
    return RecaptchaVerifier.from_settings()


__all__ = ["RecaptchaError", "RecaptchaVerifier", "get_recaptcha_verifier"]
