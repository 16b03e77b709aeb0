"""Desktop browser identities presented to marketplace storefronts."""

import random
from typing import Dict, List


# Desktop browsers only: the mobile storefronts of Amazon.in and Flipkart
# render different card markup than the adapters parse.
USER_AGENTS: List[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36 Edg/131.0.0.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:133.0) Gecko/20100101 Firefox/133.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/18.1 Safari/605.1.15",
]


def get_random_user_agent() -> str:
    """Pick a user-agent string from the pool."""
    return random.choice(USER_AGENTS)


def get_extra_headers(locale: str) -> Dict[str, str]:
    """Request headers sent with every page load.

    Args:
        locale: BCP 47 locale of the browser context, e.g. "en-IN"

    Returns:
        Header mapping with an Accept-Language matching ``locale``
    """
    language = locale.split("-")[0]
    return {
        "Accept-Language": f"{locale},{language};q=0.9",
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
    }
