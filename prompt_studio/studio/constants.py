from prompt_studio.patches.enums import PatchTerminalState

STRUCTURED_SYSTEM_MESSAGE = "You are a helpful assistant that outputs JSON."
STRUCTURED_SYSTEM_MESSAGE_STRICT = "You are a helpful assistant that outputs JSON only."

NO_FEEDBACK_PLACEHOLDER = (
    "No specific failure logs provided. Analyze for general contradictions, ambiguity, and best practices."
)

ANALYSIS_PARSE_ERROR = "Error parsing analysis result."
PLAN_PARSE_ERROR = "Error: Failed to generate patch notes."

TERMINAL_STATE_NOTES: dict[PatchTerminalState, str] = {
    PatchTerminalState.EXHAUSTED: "Error: apply_patch retries exhausted before completing the patch plan.",
    PatchTerminalState.NO_CHANGE: "Error: Model produced no effective change when applying the patch notes.",
    PatchTerminalState.ALL_FAILED: "Error: All apply_patch operations failed. See server logs for details.",
}

ANALYZE_PROMPT_TEMPLATE = """
You are a prompt engineer tasked with debugging a system prompt for an AI agent.

You are given:

1) The current system prompt:

<system_prompt>
{system_prompt}
</system_prompt>

2) A small set of logged failures. Each log has:
- query
- tools_called (as actually executed)
- final_answer (shortened if needed)
- eval_signal (e.g., thumbs_down, low rating, human grader, or user comment)

<failure_traces>
{feedback}
</failure_traces>

Your tasks:

1) Identify the distinct failure modes you see (e.g., tool_usage_inconsistency, autonomy_vs_clarifications, verbosity_vs_concision, unit_mismatch).

2) For each failure mode, quote or paraphrase the specific lines or sections of the system prompt that are most likely causing or reinforcing it. Include any contradictions (e.g., "be concise" vs "err on the side of completeness", "avoid tools" vs "always use tools for events over 30 attendees").

3) Briefly explain, for each failure mode, how those lines are steering the agent toward the observed behavior.

Return the failure modes with their drivers, plus a short high-level summary of the analysis.
"""

PLAN_PROMPT_TEMPLATE = """
You previously analyzed this system prompt and its failure modes.

System prompt:

<system_prompt>
{system_prompt}
</system_prompt>

Failure-mode analysis:

{failure_modes}

Summary:
{raw_analysis}

Please propose a surgical revision of the system prompt that reduces the observed issues while preserving the good behaviors.

Constraints:

- Do not redesign the agent from scratch.
- Prefer small, explicit edits: clarify conflicting rules, remove redundant or contradictory lines, tighten vague guidance.
- Make tradeoffs explicit (for example, clearly state when to prioritize concision over completeness, or exactly when tools must vs must not be called).
- Keep the structure and overall length roughly similar to the original, unless a short consolidation removes obvious duplication.

Very important:
- Do NOT rewrite or print the full revised system prompt.
- Return only high-signal patch notes that describe what should change and why.
"""
