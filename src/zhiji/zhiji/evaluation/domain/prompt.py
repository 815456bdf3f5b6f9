"""Prompt construction for the feasibility evaluator model."""

from zhiji.evaluation.domain.input import EvaluationInput
from zhiji.evaluation.domain.zone import Zone

UNSPECIFIED = "unspecified"

SYSTEM_PROMPT = (
    "You are an expert in assessing the feasibility of AI agent projects. "
    "Always answer with a single JSON object and nothing else."
)

_ZONE_DESCRIPTIONS: dict[Zone, str] = {
    Zone.OPTIMAL: "worth building now: achievable difficulty, solid value",
    Zone.EASY: "low difficulty; quick win",
    Zone.CHALLENGE: "very hard but valuable enough to attempt",
    Zone.INFEASIBLE: "very hard without enough value to justify it",
    Zone.OVER_INVESTMENT: "effort outweighs the limited business value",
}

_INSTRUCTIONS = """\
Score the project on these five dimensions, each an integer from 0 to 100:
1. clarityScore: how clearly the project and its scope are defined
2. capabilityScore: whether current AI technology can deliver it
3. objectivityScore: how objective and measurable its success criteria are
4. dataScore: availability and quality of the data it needs
5. toleranceScore: how well the use case tolerates AI mistakes

Also provide:
- matrixX: technical difficulty, integer 0-100
- matrixY: business value, integer 0-100
- zone: exactly one of {zones}
{zone_lines}
- suggestions: 3 to 5 improvement suggestions (list of strings)
- risks: 2 to 3 potential risks (list of strings)
- reasoning: one paragraph explaining the assessment

Reply with a single JSON object using exactly these keys: clarityScore, \
capabilityScore, objectivityScore, dataScore, toleranceScore, matrixX, matrixY, \
zone, suggestions, risks, reasoning."""


def _or_unspecified(value: str | None) -> str:
    return value if value else UNSPECIFIED


def _join(items: list[str]) -> str:
    return ", ".join(items) if items else UNSPECIFIED


def build_prompt(evaluation_input: EvaluationInput) -> str:
    """Render the user prompt asking the model to assess *evaluation_input*.

    Every input field is embedded verbatim; list fields are comma-joined and
    absent optional fields render as ``unspecified``.
    """
    zone_lines = "\n".join(
        f"  - {zone.value}: {description}"
        for zone, description in _ZONE_DESCRIPTIONS.items()
    )
    instructions = _INSTRUCTIONS.format(
        zones=", ".join(zone.value for zone in Zone),
        zone_lines=zone_lines,
    )
    return (
        "Assess the feasibility of the following AI agent project.\n\n"
        "## Project\n"
        f"- Name: {evaluation_input.project_name}\n"
        f"- Description: {evaluation_input.description}\n"
        f"- Target users: {_or_unspecified(evaluation_input.target_users)}\n"
        f"- Key features: {_join(evaluation_input.features)}\n"
        f"- Constraints: {_join(evaluation_input.constraints)}\n"
        f"- Requested model: {evaluation_input.model_id}\n\n"
        "## Task\n"
        f"{instructions}\n"
    )
