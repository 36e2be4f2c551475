"""
Shared fixtures for feedwatch tests.

Provides:
- make_feed factory for Feed records
- HTML fixtures for the top and state listing pages
"""
import pytest

from feedwatch.scrapers.models import Feed, State


@pytest.fixture
def make_feed():
    """Factory for Feed records with sensible defaults."""

    def _make_feed(
        id=1,
        name="Test Feed",
        listeners=100,
        state=None,
        county="Travis",
        alert=None,
    ):
        return Feed(
            id=id,
            name=name,
            listeners=listeners,
            state=state or State(44, "TX"),
            county=county,
            alert=alert,
        )

    return _make_feed


@pytest.fixture
def top_page_html():
    """Top listing with a header row and one data row (no county link)."""
    return """
    <html><body>
    <table class="btable">
      <tr><th>Feed</th><th>Location</th><th>Listeners</th></tr>
      <tr>
        <td class="w100"><a href="/listen/feed/42">Test Feed</a></td>
        <td><a href="/listen/stid/7">XX</a></td>
        <td class="c m">123</td>
      </tr>
    </table>
    </body></html>
    """


@pytest.fixture
def state_page_html():
    """State listing with an areawide table followed by the feed table."""
    return """
    <html><body>
    <table class="btable">
      <tr><th>Areawide Feeds</th><th>Listeners</th></tr>
      <tr>
        <td class="w1p"><a href="/listen/feed/999">Areawide Feed</a></td>
        <td class="c m">50</td>
      </tr>
    </table>
    <table class="btable">
      <tr><th>County</th><th>Feed</th><th>Listeners</th></tr>
      <tr>
        <td><a href="/listen/ctid/2648">Harris</a></td>
        <td class="w1p">
          <a href="/listen/feed/10">Houston Police</a>
          <font class="fontRed">Feed is experiencing an outage</font>
        </td>
        <td class="c m">300 </td>
      </tr>
      <tr>
        <td><a href="/listen/ctid/2743">Travis</a></td>
        <td class="w1p"><a href="/listen/feed/11">Austin Fire</a></td>
        <td class="c m">25</td>
      </tr>
    </table>
    </body></html>
    """
