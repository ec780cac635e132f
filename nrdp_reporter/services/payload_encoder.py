from lxml import etree

from nrdp_reporter.models.checkresult import CheckResultBatch


class EncodingError(RuntimeError):
    """Raised when a batch cannot be serialized into an NRDP payload."""


def _text_element(parent, name: str, value: str):
    element = etree.SubElement(parent, name)
    try:
        element.text = value
    except ValueError as exc:
        # lxml refuses NULL bytes and control characters
        raise EncodingError(f"<{name}> contains text not allowed in XML: {exc}") from exc
    return element


def encode(batch: CheckResultBatch) -> bytes:
    """
    Serialize a batch into the NRDP check-result document:

        <checkresults>
          <checkresult checktype="1" type="service">
            <servicename/> <hostname/> <state/> <output/>
          </checkresult>
        </checkresults>
    """
    root = etree.Element("checkresults")

    for result in batch:
        node = etree.SubElement(root, "checkresult", checktype="1", type="service")
        _text_element(node, "servicename", result.service_name)
        _text_element(node, "hostname", result.host_name)
        _text_element(node, "state", str(result.state))
        _text_element(node, "output", result.output)

    return etree.tostring(root, xml_declaration=True, encoding="UTF-8")
