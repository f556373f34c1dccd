import json
from typing import Any, Dict


class AutomationPayloadParser:
    """
    Adapter around the editor/API payload. The payload is expected to be a
    stringified JSON describing an automation with fields: name, description,
    isActive, trigger, nodes (the flat node array).
    """

    def parse(self, text: str) -> Dict[str, Any]:
        """
        Parse the payload into a dictionary that can be validated against the schema.

        Raises json.JSONDecodeError if the input is not valid JSON, ValueError if
        it is not a JSON object.
        """
        payload = json.loads(text)
        if not isinstance(payload, dict):
            raise ValueError("Automation payload must be a JSON object")
        return payload
