from apply_patch_py.utils import (
    get_patch_format_instructions,
    get_patch_format_tool_instructions,
)

APPLY_PATCH_TOOL_NAME = "apply_patch"

APPLY_PATCH_TOOL_DESCRIPTION = get_patch_format_tool_instructions()

APPLY_PATCH_TYPE_DESCRIPTION = (
    "Operation to perform: 'update_file' edits an existing file, 'create_file' writes a new file, "
    "'delete_file' removes a file."
)

APPLY_PATCH_PATH_DESCRIPTION = "Relative path of the file to edit, exactly as listed in the snapshot."

APPLY_PATCH_DIFF_DESCRIPTION = get_patch_format_instructions()

PATCH_PROMPT_TEMPLATE = """
You are a coding assistant that updates files exclusively through the apply_patch tool using the **V4A patch format**.

Repository snapshot:
<BEGIN_FILES>
===== {target_name}
{document}
<END_FILES>

Failure-mode analysis (read-only context):
{failure_modes}

Patch notes (authoritative plan you MUST follow):
{patch_notes}

V4A formatting rules (non-negotiable):
1. Wrap every change in "*** Begin Patch" and "*** End Patch".
2. Use "*** Update File: {target_name}" for edits, "*** Add File" for new files, and "*** Delete File" for removals.
3. For updates, include one or more "@@ ... @@" hunks with leading " ", "+", or "-" markers per line.
4. Provide only the minimal span required for each patch note. Unchanged text must remain byte-for-byte identical.
5. Never emit natural language outside of apply_patch calls and never restate the entire file unless a patch note requires a full rewrite.
"""
