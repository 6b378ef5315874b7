# -*- coding: utf-8 -*-
# backend/errors.py
from __future__ import annotations


class DailyError(Exception):
    """Errore applicativo con status HTTP associato."""

    status = 400
    code = "bad_request"

    def __init__(self, message: str | None = None):
        self.message = message or self.code
        super().__init__(self.message)


class Unauthorized(DailyError):
    status = 401
    code = "unauthorized"


class BadRequest(DailyError):
    status = 400
    code = "bad_request"


__all__ = ["DailyError", "Unauthorized", "BadRequest"]
