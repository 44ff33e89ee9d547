"""LATAM booking provider driving the "my trips" page through Selenium.

LATAM exposes no token based API for this lookup, so every check opens its own
Chrome session, loads the trip status page for the purchase number and looks
for the warning banner shown on changed trips.  Each session is quit before
the check returns, whatever the outcome.
"""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional
from urllib.parse import urlencode

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..models import BookingLookupRequest, CarrierCredential, ProviderOutcome
from .base import BrowserProviderConfig, ProviderError

LOGGER = logging.getLogger(__name__)

LATAM_STATUS_URL = "https://www.latamairlines.com/br/pt/minhas-viagens/second-detail"


@dataclass
class LatamConfig(BrowserProviderConfig):
    """Extends :class:`BrowserProviderConfig` with the page selectors."""

    status_url: str = LATAM_STATUS_URL
    warning_selector: str = "[data-testid='alert-warning'], .alert-warning"
    date_selector: str = "[data-testid='itinerary-date'], .itinerary-date"


class LatamProvider:
    """Check a LATAM booking through an interactive browser session."""

    name = "latam"
    requires_credential = False

    def __init__(
        self,
        config: Optional[LatamConfig] = None,
        *,
        driver_factory: Optional[Callable[[], WebDriver]] = None,
    ) -> None:
        self.config = config or LatamConfig()
        self._driver_factory = driver_factory or self._build_driver

    def check(self, request: BookingLookupRequest, credential: Optional[CarrierCredential] = None) -> ProviderOutcome:
        if not request.purchase_number:
            raise ProviderError("LATAM booking is missing a purchase number")

        url = self._build_status_url(request)
        with self._session() as driver:
            try:
                LOGGER.info("Navigating to LATAM status page for purchase %s", request.purchase_number)
                driver.get(url)
            except WebDriverException as exc:
                raise ProviderError(f"LATAM navigation failed: {exc.msg or exc}") from exc

            altered = self._has_warning(driver)
            flight_date = self._read_flight_date(driver)
        return ProviderOutcome(altered=altered, flight_date=flight_date)

    @contextlib.contextmanager
    def _session(self) -> Iterator[WebDriver]:
        try:
            driver = self._driver_factory()
        except WebDriverException as exc:
            raise ProviderError(f"Unable to start browser session: {exc.msg or exc}") from exc
        try:
            driver.set_page_load_timeout(self.config.navigation_timeout)
            yield driver
        finally:
            LOGGER.debug("Closing Selenium driver")
            with contextlib.suppress(WebDriverException):
                driver.quit()

    def _has_warning(self, driver: WebDriver) -> bool:
        # A timeout here is indistinguishable from "no warning" and is reported as not altered.
        try:
            WebDriverWait(driver, self.config.wait_timeout).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, self.config.warning_selector))
            )
        except TimeoutException:
            LOGGER.debug("No LATAM warning indicator on %s", driver.current_url)
            return False
        return True

    def _read_flight_date(self, driver: WebDriver) -> Optional[str]:
        try:
            text = driver.find_element(By.CSS_SELECTOR, self.config.date_selector).text
        except WebDriverException:
            return None
        return text.strip() or None

    def _build_status_url(self, request: BookingLookupRequest) -> str:
        params = {"orderId": request.purchase_number, "lastname": request.last_name}
        return f"{self.config.status_url}?{urlencode(params)}"

    def _build_driver(self) -> WebDriver:
        options = ChromeOptions()
        if self.config.headless:
            options.add_argument("--headless=new")
            options.add_argument("--disable-gpu")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--window-size=1920,1080")
        return webdriver.Chrome(options=options)
