import time
from dataclasses import dataclass, field
from typing import Callable

import requests
from requests.adapters import HTTPAdapter

TOO_MANY_REQUESTS = 429
CONFLICT = 409


def is_success(response):
    return 200 <= response.status_code < 300


class HttpTransport:
    """A requests session with a fixed timeout.

    One instance serves short metadata calls, another serves long chunk
    uploads; callers pick the one they need.
    """

    def __init__(self, timeout, max_retries=3, headers=None):
        self.timeout = timeout
        self.session = requests.Session()
        adapter = HTTPAdapter(max_retries=max_retries)
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)
        if headers:
            self.session.headers.update(headers)

    def request(self, method, url, **kwargs):
        kwargs.setdefault('timeout', self.timeout)
        return self.session.request(method, url, **kwargs)

    def close(self):
        self.session.close()


@dataclass
class RetryPolicy:
    """Fixed cooldown between a bounded number of attempts"""
    max_attempts: int = 2
    cooldown_seconds: float = 60.0
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def wait(self):
        self.sleep(self.cooldown_seconds)
