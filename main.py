import logging
import sys

from pydantic import ValidationError

from config import Settings, configure_logging
from db import AutomationRepository, SqlAlchemyAutomationRepository, create_session_factory
from graph import GraphDiagnostic, build_node_tree, validate_tree_structure
from models import Automation
from registry import create_default_registries
from serialization import AutomationPayloadParser, format_tree
from validations import parse_and_validate_automation

logger = logging.getLogger(__name__)


def orchestrate_payload(payload_text: str, repository: AutomationRepository, org_id: str, user_id: str) -> str:
    """
    Orchestrate the ingestion of an automation payload:
    1. Parse stringified JSON.
    2. Validate against Automation schema, registries and node structure.
    3. Save to persistence layer.

    Returns the saved automation id.
    """
    registries = create_default_registries()
    parsed_payload = AutomationPayloadParser().parse(payload_text)
    automation: Automation = parse_and_validate_automation(parsed_payload, registries)
    return repository.save(automation, org_id=org_id, created_by=user_id)


def render_automation(automation: Automation) -> str:
    diagnostics: list[GraphDiagnostic] = []
    root = build_node_tree(automation.nodes, diagnostics)
    result = validate_tree_structure(root)
    if not result.is_valid:
        logger.warning("Tree for %s failed validation: %s", automation.name, result.error)
    trigger = automation.trigger
    header = f"When {trigger.object_type} moves"
    if trigger.from_status:
        header += f" from {trigger.from_status}"
    header += f" to {trigger.to_status}:"
    lines = [automation.name, header, format_tree(root, indent="  ")]
    # branches dropped while building
    lines.extend(f"warning: {diagnostic.message}" for diagnostic in diagnostics)
    return "\n".join(lines)


if __name__ == "__main__":
    settings = Settings.from_env()
    configure_logging(settings)

    if len(sys.argv) > 1:
        with open(sys.argv[1], encoding="utf-8") as handle:
            payload_text = handle.read()
    else:
        # No file given: read the payload from stdin
        payload_text = sys.stdin.read()

    if not payload_text.strip():
        print("No input provided. Exiting.")
        sys.exit(1)

    repo = SqlAlchemyAutomationRepository(create_session_factory(settings.database_url))
    try:
        automation_id = orchestrate_payload(payload_text, repo, settings.org_id, settings.user_id)
    except (ValidationError, ValueError) as exc:
        print(f"Automation rejected: {exc}")
        sys.exit(1)

    print(f"Automation saved with id: {automation_id}")
    print(render_automation(repo.get_or_raise(automation_id, settings.org_id)))
