import logging
from typing import Optional
from urllib.parse import quote_plus

import httpx
from lxml import etree

from nrdp_reporter.models.outcome import SubmissionOutcome

logger = logging.getLogger(__name__)

CHARSET = "UTF-8"

_HEADERS = {
    "Content-Type": f"application/x-www-form-urlencoded;charset={CHARSET}",
    "Accept-Charset": CHARSET,
}

# no entity expansion or network access while reading receiver answers
_RESPONSE_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def build_request_body(token: str, payload: bytes) -> bytes:
    """Form-encode the token and XML payload the way NRDP expects them."""
    xml_text = payload.decode(CHARSET)
    query = "token={}&cmd=submitcheck&XMLDATA={}\n".format(
        quote_plus(token, encoding=CHARSET),
        quote_plus(xml_text, encoding=CHARSET),
    )
    return query.encode(CHARSET)


def parse_acknowledgement(content: bytes) -> SubmissionOutcome:
    """
    Interpret the receiver's <result><status/><message/></result> answer.

    Raises ValueError if the document is not well-formed or has no single
    numeric /result/status.
    """
    try:
        document = etree.fromstring(content, parser=_RESPONSE_PARSER)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise ValueError(f"malformed NRDP response: {exc}") from exc

    statuses = document.xpath("/result/status/text()")
    if len(statuses) != 1:
        raise ValueError("NRDP response has no /result/status")

    try:
        status = int(statuses[0].strip())
    except ValueError as exc:
        raise ValueError(f"non-numeric NRDP status {statuses[0]!r}") from exc

    if status == 0:
        return SubmissionOutcome.success()

    message = "".join(document.xpath("/result/message/text()"))
    return SubmissionOutcome.rejected(message.strip())


def submit(
    receiver_url: str,
    token: str,
    payload: bytes,
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
) -> SubmissionOutcome:
    """
    POST one encoded batch to the NRDP receiver and classify the answer.

    Exactly one attempt is made. Failures are returned as outcomes, never
    raised: a non-200 status or any network, encoding or parsing problem
    becomes a transport error, a non-zero NRDP status a rejection.

    A caller-supplied client is reused and left open; otherwise a client is
    created for this single exchange.
    """
    try:
        body = build_request_body(token, payload)
    except UnicodeDecodeError as exc:
        return SubmissionOutcome.transport_error(cause=f"payload is not valid {CHARSET}: {exc}")

    logger.debug("Posting %d byte NRDP request to %s", len(body), receiver_url)

    try:
        if client is None:
            with httpx.Client(timeout=timeout) as own_client:
                response = own_client.post(receiver_url, content=body, headers=_HEADERS)
        else:
            response = client.post(receiver_url, content=body, headers=_HEADERS)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return SubmissionOutcome.transport_error(cause=f"{type(exc).__name__}: {exc}")

    if response.status_code != 200:
        return SubmissionOutcome.transport_error(status_code=response.status_code)

    try:
        return parse_acknowledgement(response.content)
    except ValueError as exc:
        return SubmissionOutcome.transport_error(cause=str(exc))
