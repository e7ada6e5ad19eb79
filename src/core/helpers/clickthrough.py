"""Clickthrough URL rewriting for rich media markup.

Exported creatives hard-code their destination URL. Before publishing, each
URL is prefixed with a runtime expression that reads the ad server redirect
from the ?adserver= query parameter of the serving page, so clicks are routed
through the ad server.

gwd:
    gwd.actions.gwdGoogleAd.exit('gwd-ad', 'Btn-Exit', 'https://example.com', true, true);
    -> ...exit('gwd-ad', 'Btn-Exit', <indirection> + 'https://example.com', true, true);

conversion:
    var clickTag = 'https://example.com'
    -> var clickTag = <indirection> + "https://example.com"

Matching is regex based: whitespace and everything outside the URL literal
comes out byte for byte.
"""

import logging
import re
from dataclasses import dataclass

from src.core.bundles import ROOT_HTML_MARKER, BundleType

logger = logging.getLogger(__name__)

INDIRECTION_EXPRESSION = "decodeURIComponent(window.location.href.split('?adserver=')[1]) + "


@dataclass(frozen=True)
class ClickthroughPattern:
    """Where to look for clickthrough URLs and how to re-emit them."""

    occurrence: re.Pattern[str]
    url_literal: re.Pattern[str]
    quote: str
    suffix: str = ""

    def emit(self, url: str, source_quote: str) -> str:
        """Re-quote a URL, escaping the output quote if the source used the other one."""
        if source_quote != self.quote:
            url = url.replace(self.quote, "\\" + self.quote)
        return f"{self.quote}{url}{self.quote}{self.suffix}"


CLICKTHROUGH_PATTERNS: dict[BundleType, ClickthroughPattern] = {
    # Exit calls stay on one line; the URL is never the last argument
    BundleType.GWD: ClickthroughPattern(
        occurrence=re.compile(r"\.exit\([^)\n]+\)"),
        url_literal=re.compile(r"(?P<quote>[\"'])(?P<url>https?://\S+?)(?P=quote),"),
        quote="'",
        suffix=",",
    ),
    BundleType.CONVERSION: ClickthroughPattern(
        occurrence=re.compile(r"clickTag\s*=\s*[\"']\S*[\"']", re.IGNORECASE),
        url_literal=re.compile(r"(?P<quote>[\"'])(?P<url>https?://\S+?)(?P=quote)"),
        quote='"',
    ),
}


def is_markup_file(path: str) -> bool:
    """Whether a bundle file gets its clickthrough URLs rewritten."""
    return ROOT_HTML_MARKER in path


def rewrite_clickthrough_urls(body: str, bundle_type: BundleType) -> str:
    """Route every hard-coded clickthrough URL in a markup body through the ad server.

    Args:
        body: Decoded text of an .html file from the bundle
        bundle_type: Exporter the bundle came from

    Returns:
        Body with each clickthrough URL wrapped in INDIRECTION_EXPRESSION.
        Bodies without clickthroughs are returned unchanged.

    Example:
        >>> rewrite_clickthrough_urls('var clickTag = "https://a.com"', BundleType.CONVERSION)
        'var clickTag = decodeURIComponent(window.location.href.split(\\'?adserver=\\')[1]) + "https://a.com"'
    """
    pattern = CLICKTHROUGH_PATTERNS[bundle_type]
    rewritten_count = 0

    def _wrap_url(url_match: re.Match[str]) -> str:
        nonlocal rewritten_count
        rewritten_count += 1
        return INDIRECTION_EXPRESSION + pattern.emit(url_match.group("url"), url_match.group("quote"))

    def _rewrite_occurrence(occurrence: re.Match[str]) -> str:
        return pattern.url_literal.sub(_wrap_url, occurrence.group(0))

    output = pattern.occurrence.sub(_rewrite_occurrence, body)

    if rewritten_count:
        logger.debug(
            "Rewrote clickthrough URLs",
            extra={"bundle_type": bundle_type.value, "rewritten_count": rewritten_count},
        )

    return output
