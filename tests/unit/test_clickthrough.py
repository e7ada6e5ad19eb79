"""Tests for clickthrough URL rewriting."""

import pytest

from src.core.bundles import BundleType
from src.core.helpers.clickthrough import INDIRECTION_EXPRESSION, is_markup_file, rewrite_clickthrough_urls

pytestmark = pytest.mark.unit

DECODE = "decodeURIComponent(window.location.href.split('?adserver=')[1]) + "


def test_indirection_expression():
    assert INDIRECTION_EXPRESSION == DECODE


class TestGwdClickthroughs:
    """Exit calls in Google Web Designer handlers."""

    def test_single_exit_call(self):
        body = """
            <script type="text/javascript" gwd-events="handlers">
                gwd.auto_Btn_Exit_1Action = function(event) {
                    // GWD Predefined Function
                    gwd.actions.gwdGoogleAd.exit('gwd-ad', 'Btn-Exit', 'http://www.google.com/', true, true);
                };
            </script>
        """
        expected = f"""
            <script type="text/javascript" gwd-events="handlers">
                gwd.auto_Btn_Exit_1Action = function(event) {{
                    // GWD Predefined Function
                    gwd.actions.gwdGoogleAd.exit('gwd-ad', 'Btn-Exit', {DECODE}'http://www.google.com/', true, true);
                }};
            </script>
        """

        assert rewrite_clickthrough_urls(body, BundleType.GWD) == expected

    def test_multiple_exit_calls_in_order(self):
        urls = [
            "'https://www.google.com/'",
            "'https://www.google.ca'",
            "'https://www.google.co.uk'",
            "'https://google.org'",
            '"https://google.org"',
        ]
        handler = "gwd.actions.gwdGoogleAd.exit('gwd-ad', 'Btn-Exit', {url}, true, true);"
        body = "\n".join(handler.format(url=url) for url in urls)
        expected = "\n".join(
            handler.format(url=DECODE + "'" + url.strip("'\"") + "'") for url in urls
        )

        result = rewrite_clickthrough_urls(body, BundleType.GWD)

        assert result == expected
        assert result.count(DECODE) == 5

    def test_double_quoted_url_becomes_single_quoted(self):
        body = 'gwd.actions.gwdGoogleAd.exit("gwd-ad", "Btn-Exit", "https://google.org", true, true);'

        result = rewrite_clickthrough_urls(body, BundleType.GWD)

        assert result == f'gwd.actions.gwdGoogleAd.exit("gwd-ad", "Btn-Exit", {DECODE}\'https://google.org\', true, true);'

    def test_url_as_last_argument_left_alone(self):
        body = "gwd.actions.gwdGoogleAd.exit('gwd-ad', 'https://google.org');"

        assert rewrite_clickthrough_urls(body, BundleType.GWD) == body

    def test_exit_call_does_not_span_lines(self):
        body = "gwd.actions.gwdGoogleAd.exit('gwd-ad',\n 'https://google.org', true);"

        assert rewrite_clickthrough_urls(body, BundleType.GWD) == body

    def test_clicktag_ignored_for_gwd(self):
        body = 'var clickTag = "https://google.org"'

        assert rewrite_clickthrough_urls(body, BundleType.GWD) == body

    def test_minified_exit_call(self):
        body = "gwd.actions.gwdGoogleAd.exit('gwd-ad','Btn','https://x.com',true,true);"

        result = rewrite_clickthrough_urls(body, BundleType.GWD)

        assert result == f"gwd.actions.gwdGoogleAd.exit('gwd-ad','Btn',{DECODE}'https://x.com',true,true);"

    def test_url_containing_other_quote(self):
        body = """gwd.actions.gwdGoogleAd.exit("gwd-ad", "Btn", "https://a.com/?q=it's", true);"""

        result = rewrite_clickthrough_urls(body, BundleType.GWD)

        assert result == (
            f"""gwd.actions.gwdGoogleAd.exit("gwd-ad", "Btn", {DECODE}'https://a.com/?q=it\\'s', true);"""
        )


class TestConversionClickthroughs:
    """clickTag assignments in generic HTML5 bundles."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ('var clickTag = "http://plancherspayless.com/fr/"', f'var clickTag = {DECODE}"http://plancherspayless.com/fr/"'),
            ("var clickTag = 'http://plancherspayless.com/fr/'", f'var clickTag = {DECODE}"http://plancherspayless.com/fr/"'),
            ('let clickTag = "http://plancherspayless.com/fr/"', f'let clickTag = {DECODE}"http://plancherspayless.com/fr/"'),
            ('const clickTag = "http://plancherspayless.com/fr/"', f'const clickTag = {DECODE}"http://plancherspayless.com/fr/"'),
            ('var ClickTAG = "http://plancherspayless.com/fr/"', f'var ClickTAG = {DECODE}"http://plancherspayless.com/fr/"'),
            ('var clickTag  =  "http://plancherspayless.com/fr/"', f'var clickTag  =  {DECODE}"http://plancherspayless.com/fr/"'),
            ('var clickTag="http://plancherspayless.com/fr/"', f'var clickTag={DECODE}"http://plancherspayless.com/fr/"'),
        ],
    )
    def test_clicktag_assignment(self, source, expected):
        body = f"""
            <script>
                {source}
            </script>
        """

        assert rewrite_clickthrough_urls(body, BundleType.CONVERSION) == body.replace(source, expected)

    def test_multiple_assignments(self):
        body = 'var clickTag = "https://a.com";\nvar clickTag2 = "x";\nclickTAG = \'https://b.com\';'

        result = rewrite_clickthrough_urls(body, BundleType.CONVERSION)

        assert result == (
            f'var clickTag = {DECODE}"https://a.com";\nvar clickTag2 = "x";\nclickTAG = {DECODE}"https://b.com";'
        )

    def test_non_http_value_left_alone(self):
        body = 'var clickTag = "javascript:void(0)"'

        assert rewrite_clickthrough_urls(body, BundleType.CONVERSION) == body

    def test_url_containing_apostrophe(self):
        body = """var clickTag = "https://a.com/?q=it's";"""

        result = rewrite_clickthrough_urls(body, BundleType.CONVERSION)

        assert result == f"""var clickTag = {DECODE}"https://a.com/?q=it's";"""

    def test_single_quoted_url_containing_double_quotes(self):
        body = """var clickTag = 'https://a.com/?q="x"';"""

        result = rewrite_clickthrough_urls(body, BundleType.CONVERSION)

        assert result == f"""var clickTag = {DECODE}"https://a.com/?q=\\"x\\"";"""

    def test_second_pass_finds_nothing_new(self):
        once = rewrite_clickthrough_urls('var clickTag = "https://a.com"', BundleType.CONVERSION)

        assert rewrite_clickthrough_urls(once, BundleType.CONVERSION) == once


@pytest.mark.parametrize("bundle_type", list(BundleType))
def test_body_without_clickthroughs_unchanged(bundle_type):
    body = "<html>\n  <body>\t<img src='assets/a.png'>\n</body>\n</html>\n"

    assert rewrite_clickthrough_urls(body, bundle_type) == body


@pytest.mark.parametrize(
    "path,expected",
    [("index.html", True), ("banner/index.html", True), ("assets/app.js", False), ("styles.css", False)],
)
def test_is_markup_file(path, expected):
    assert is_markup_file(path) is expected
