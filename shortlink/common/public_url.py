"""Public short URL construction behind reverse proxies."""

from typing import Mapping, NamedTuple, Optional


PUBLIC_SCHEMES = ("http", "https")


class ForwardedInfo(NamedTuple):
    """The subset of X-Forwarded-* headers used to build public URLs."""

    proto: Optional[str]
    host: Optional[str]
    client: Optional[str]


def _first_hop(value: Optional[str]) -> Optional[str]:
    # Chained proxies append: "https, http" -> "https"
    if not value:
        return None
    first = value.split(",", 1)[0].strip()
    return first or None


def read_forwarded(headers: Mapping[str, str]) -> ForwardedInfo:
    """Read forwarded proxy headers, case-insensitively.

    Args:
        headers: Request headers

    Returns:
        ForwardedInfo with the client-facing value of each header
    """
    lowered = {name.lower(): value for name, value in headers.items()}
    return ForwardedInfo(
        proto=_first_hop(lowered.get("x-forwarded-proto")),
        host=_first_hop(lowered.get("x-forwarded-host")),
        client=_first_hop(lowered.get("x-forwarded-for")),
    )


def public_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Work out the origin clients use to reach this service.

    Forwarded proto and host win when both are present and the proto is
    http or https, then the request's own scheme and Host header, then
    the configured base URL.

    Args:
        headers: Request headers
        fallback_base_url: Configured base URL
        request_scheme: Scheme the request arrived with
        request_host: Host header of the request

    Returns:
        Origin without a trailing slash, e.g. https://sho.rt
    """
    forwarded = read_forwarded(headers)

    if forwarded.host and forwarded.proto and forwarded.proto.lower() in PUBLIC_SCHEMES:
        return f"{forwarded.proto.lower()}://{forwarded.host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def short_url_for(slug: str, base_url: str, path_prefix: str = "") -> str:
    """Join origin, optional mount prefix and slug into the public short URL."""
    segments = [base_url.rstrip("/")]
    if path_prefix.strip("/"):
        segments.append(path_prefix.strip("/"))
    segments.append(slug)
    return "/".join(segments)
