"""
Download resolution and authentication against the JDK distribution site.

Older JDKs can only be downloaded with an Oracle account. Asking for a bundle
URL either returns the binary directly or redirects through the single
sign-on site, which serves one or more HTML forms before handing out the
bits. ``JDKResolver`` walks through those forms like a browser with
JavaScript turned off would:

1. Look up the release in the catalog and pick the artifact for the target
2. GET the artifact URL
3. While the response is an HTML page on the SSO host, fill in and submit
   whichever known login form it contains
4. Return the first non-HTML response, still streaming

Example:
    >>> resolver = JDKResolver(JsonCatalogProvider(Path("catalog.json")))
    >>> response = resolver.resolve(
    ...     "jdk-7u80-oth-JPR", Platform.LINUX, CPU.X86_64,
    ...     credentials=Credentials("me@example.com", "secret"),
    ... )
    >>> with response:
    ...     stream_to_file(response, Path("jdk.tar.gz"))
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, TextIO
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from jdkkit.core.exceptions import (
    AuthenticationFailed,
    AuthenticationRequired,
    NotFound,
    ProtocolViolation,
)
from jdkkit.core.platform import CPU, Platform
from jdkkit.jdk.catalog import ArtifactFile, CatalogProvider
from jdkkit.jdk.matcher import require_best

logger = logging.getLogger(__name__)

SSO_HOST = "login.oracle.com"

# Form that checks the browser can submit forms; it only wants the username
PRE_AUTH_FORM = "myForm"
# The real authentication form
LOGIN_FORM = "LoginForm"
USERNAME_FIELD = "ssousername"
PASSWORD_FIELD = "password"

MAX_AUTH_ATTEMPTS = 4
MAX_PAGES = 16

DEFAULT_TIMEOUT = 60

_NON_VALUE_INPUTS = {"submit", "button", "image", "reset", "file"}


@dataclass(frozen=True)
class Credentials:
    """Account used to log into the distribution site."""

    username: str
    password: str = field(repr=False)


def _print(out: Optional[TextIO], message: str) -> None:
    logger.info(message)
    if out is not None:
        print(message, file=out)


def _checked(response: requests.Response) -> requests.Response:
    try:
        response.raise_for_status()
    except requests.HTTPError:
        response.close()
        raise
    return response


def _is_html(response: requests.Response) -> bool:
    content_type = response.headers.get("content-type", "").lower()
    return "text/html" in content_type or "application/xhtml+xml" in content_type


def _find_form(soup: BeautifulSoup, name: str, fields: Iterable[str]):
    """Find the form with the given name that has all of the given fields."""
    form = soup.find("form", attrs={"name": name})
    if form is None:
        return None
    for field_name in fields:
        if form.find("input", attrs={"name": field_name}) is None:
            return None
    return form


def _form_values(form) -> Dict[str, str]:
    """Collect the values a browser would submit for a form."""
    values: Dict[str, str] = {}

    for element in form.find_all("input"):
        name = element.get("name")
        input_type = (element.get("type") or "text").lower()
        if not name or input_type in _NON_VALUE_INPUTS:
            continue
        if input_type in ("checkbox", "radio") and not element.has_attr("checked"):
            continue
        values[name] = element.get("value", "")

    for element in form.find_all("select"):
        name = element.get("name")
        if not name:
            continue
        option = element.find("option", selected=True) or element.find("option")
        if option is not None:
            values[name] = option.get("value", option.get_text())

    for element in form.find_all("textarea"):
        name = element.get("name")
        if name:
            values[name] = element.get_text()

    return values


class JDKResolver:
    """
    Resolves a release id to a streaming download of the right bundle.

    Attributes:
        catalog_provider: Source of the release catalog
        sso_host: Only host allowed to serve HTML pages during the login flow
        timeout: Per-request timeout in seconds
        credential_hint: Where the user can supply credentials; included in
            authentication errors
    """

    def __init__(
        self,
        catalog_provider: CatalogProvider,
        sso_host: str = SSO_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        session_factory: Callable[[], requests.Session] = requests.Session,
        credential_hint: str = "",
    ):
        self.catalog_provider = catalog_provider
        self.sso_host = sso_host
        self.timeout = timeout
        self.session_factory = session_factory
        self.credential_hint = credential_hint

    def locate(self, release_id: str, platform: Platform, cpu: CPU) -> ArtifactFile:
        """
        Find the artifact file to download for a release.

        Raises:
            NotFound: If the catalog is empty or has no such release
            NoCompatibleArtifact: If no file of the release fits
        """
        catalog = self.catalog_provider.load_catalog()
        if catalog.is_empty():
            raise NotFound("JDK data is empty.", release_id)

        release = catalog.get_release(release_id)
        if release is None:
            raise NotFound(f"Unable to find JDK with ID={release_id}", release_id)

        return require_best(release.files, platform, cpu)

    def resolve(
        self,
        release_id: str,
        platform: Platform,
        cpu: CPU,
        credentials: Optional[Credentials] = None,
        out: Optional[TextIO] = None,
    ) -> requests.Response:
        """
        Obtain the download stream for a release.

        Args:
            release_id: Catalog id of the release
            platform: Target platform
            cpu: Target CPU
            credentials: Account for the distribution site, if configured
            out: Stream receiving user-visible progress messages

        Returns:
            Streaming response of the bundle; the caller closes it

        Raises:
            NotFound: If the release is not in the catalog
            NoCompatibleArtifact: If no file of the release fits
            AuthenticationRequired: If a login is needed and no credentials are set
            AuthenticationFailed: If the credentials keep being rejected
            ProtocolViolation: If the site's login flow is not recognized
            requests.RequestException: If an HTTP request fails
        """
        artifact = self.locate(release_id, platform, cpu)

        _print(out, f"Downloading JDK from {artifact.download_path}")
        session = self.session_factory()
        response = self._get(session, artifact.download_path)
        return self._login(session, response, credentials, out)

    def _login(
        self,
        session: requests.Session,
        response: requests.Response,
        credentials: Optional[Credentials],
        out: Optional[TextIO],
    ) -> requests.Response:
        """Drive the login forms until the site hands out a non-HTML response."""
        auth_count = 0
        page_count = 0

        while _is_html(response):
            url = response.url
            host = urlparse(url).hostname
            if host != self.sso_host:
                response.close()
                raise ProtocolViolation(
                    f"Expected to see a login page but instead saw {url}"
                )

            # The page is fully read, so it can be released before any exit
            html = response.text
            response.close()
            page_count += 1
            if page_count > MAX_PAGES:
                raise ProtocolViolation(f"Unable to find the login form in {html}")

            logger.debug(f"Login page #{page_count} at {url}")
            soup = BeautifulSoup(html, "html.parser")

            form = _find_form(soup, PRE_AUTH_FORM, [USERNAME_FIELD])
            if form is not None:
                username = credentials.username if credentials else ""
                response = self._submit(session, url, form, {USERNAME_FIELD: username})
                continue

            form = _find_form(soup, LOGIN_FORM, [USERNAME_FIELD, PASSWORD_FIELD])
            if form is not None:
                if credentials is None:
                    _print(
                        out,
                        "Oracle now requires Oracle account to download previous "
                        "versions of JDK. Please specify your Oracle account "
                        "username/password.",
                    )
                    raise AuthenticationRequired(
                        "Unable to install JDK unless a valid username/password "
                        "is provided.",
                        self.credential_hint,
                    )

                auth_count += 1
                if auth_count > MAX_AUTH_ATTEMPTS:
                    _print(
                        out,
                        "Your Oracle account doesn't appear valid. Please specify "
                        "a valid username/password",
                    )
                    raise AuthenticationFailed(
                        "Unable to install JDK unless a valid username/password "
                        "is provided.",
                        self.credential_hint,
                    )

                response = self._submit(
                    session,
                    url,
                    form,
                    {
                        USERNAME_FIELD: credentials.username,
                        PASSWORD_FIELD: credentials.password,
                    },
                )
                continue

            raise ProtocolViolation(f"Unable to find the login form in {html}")

        return response

    def _get(self, session: requests.Session, url: str, **kwargs) -> requests.Response:
        response = session.get(url, stream=True, timeout=self.timeout, **kwargs)
        return _checked(response)

    def _submit(
        self,
        session: requests.Session,
        page_url: str,
        form,
        overrides: Dict[str, str],
    ) -> requests.Response:
        """Submit a form the way a browser would."""
        target = urljoin(page_url, form.get("action") or page_url)
        method = (form.get("method") or "get").lower()

        data = _form_values(form)
        data.update(overrides)
        logger.debug(f"Submitting form '{form.get('name')}' to {target}")

        if method == "post":
            response = session.post(
                target, data=data, stream=True, timeout=self.timeout
            )
            return _checked(response)
        return self._get(session, target, params=data)


__all__ = [
    "Credentials",
    "JDKResolver",
    "SSO_HOST",
    "MAX_AUTH_ATTEMPTS",
    "MAX_PAGES",
]
