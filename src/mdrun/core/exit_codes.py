from __future__ import annotations

OK = 0
ERR_FAILURE = 1
ERR_CONFIG = 2
ERR_VALIDATION = 3
ERR_INTERNAL = 99
