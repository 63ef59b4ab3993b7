"""Prompt templates for each oracle request shape.

Each function returns (system_prompt, user_prompt) to keep
prompt engineering cleanly separated from retry/orchestration logic.
"""

from __future__ import annotations

from component_chameleon.ai.llm_schemas import (
    COMPONENT_SCHEMA,
    ALTERNATIVES_SCHEMA,
    BOM_HEALTH_SCHEMA,
    schema_to_prompt_string,
)
from component_chameleon.schemas.component import ComponentRecord
from component_chameleon.schemas.bom import BomPartQuery


# ─── Shared Rules ───

SHARED_RULES = """
CRITICAL RULES:
1. Return ONLY valid JSON. No markdown, no code fences, no explanations.
2. Follow the provided JSON schema EXACTLY, using the camelCase field names.
3. Never omit a field. Use "N/A" for any unavailable information.
4. Prefer real, manufacturable, in-production parts.
""".strip()

SOURCING_ROLE = (
    "You are an expert electrical engineer's assistant specializing in "
    "electronic component sourcing. You have deep knowledge of components "
    "from distributors like Digi-Key, Mouser, and Octopart. "
    "You provide precise, structured data."
)


# ─── Single Component Lookup ───


def component_lookup_prompts(query: str) -> tuple[str, str]:
    """Return (system, user) prompts for a single-component lookup."""

    system = f"""{SOURCING_ROLE}

{SHARED_RULES}

OUTPUT JSON SCHEMA (a single object):
{schema_to_prompt_string(COMPONENT_SCHEMA)}

FIELD GUIDELINES:
- datasheetLink: A full, valid URL (including https://) to the datasheet.
- specs: "Name: Value" strings, e.g. "Resistance: 10 kOhms".
- partStatus: e.g. "Active", "In Production", "NRND", "Obsolete".
- rohsStatus: e.g. "Compliant", "Non-Compliant", "Compliant by Exemption".
- reachStatus: e.g. "Compliant", "Non-Compliant", "Affected"."""

    user = f"""Find a specific, common, in-production electronic component that matches the following description or part number: "{query}".

Provide its full details, including its lifecycle status, RoHS and REACH status.
If no specific component can be found, populate all string fields with "Not Found" and the specs array with [].
Otherwise, ensure all fields are populated, using "N/A" for any unavailable information.
Return ONLY the JSON object matching the schema."""

    return system, user


# ─── Alternatives ───


def alternatives_prompts(
    original: ComponentRecord,
    max_alternatives: int = 3,
) -> tuple[str, str]:
    """Return (system, user) prompts for finding drop-in alternatives."""

    system = f"""{SOURCING_ROLE} You specialize in cross-referencing parts.

{SHARED_RULES}

OUTPUT JSON SCHEMA (an array of objects):
{schema_to_prompt_string(ALTERNATIVES_SCHEMA)}

Each alternative's justification explains why it is a viable replacement."""

    user = f"""Given the component "{original.part_number}" from "{original.manufacturer}" with these key specifications: {", ".join(original.specs)}.

Find up to {max_alternatives} viable, in-production alternatives. For each alternative, provide all the required details, including its lifecycle status, RoHS and REACH compliance status.
Return ONLY the JSON array matching the schema."""

    return system, user


# ─── BOM Health ───


def bom_health_prompts(queries: list[BomPartQuery]) -> tuple[str, str]:
    """Return (system, user) prompts for a batch lifecycle/stock lookup."""

    parts = ", ".join(
        f'(Manufacturer: "{q.manufacturer}", Part Number: "{q.part_number}")'
        for q in queries
    )

    system = f"""You are a supply chain analyst AI. Provide concise, accurate data on electronic component health.
Use standard industry terms like 'In Production', 'NRND' (Not Recommended for New Designs), 'Obsolete', 'Good', 'Low', 'None'.

{SHARED_RULES}

OUTPUT JSON SCHEMA (an array of objects, one per component):
{schema_to_prompt_string(BOM_HEALTH_SCHEMA)}

FIELD GUIDELINES:
- lifecycleStatus: e.g. "In Production", "NRND", "Obsolete".
- stockAvailability: e.g. "Good", "Low", "None".
- leadTime: e.g. "Stock", "4 Weeks"."""

    user = f"""For the following list of electronic components, provide their current lifecycle status, stock availability, and estimated factory lead time.
If a part is not found, return its status as "Unknown". Ensure you return the original manufacturer and part number for each item.

Components: {parts}

Return ONLY the JSON array matching the schema."""

    return system, user
