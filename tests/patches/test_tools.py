from prompt_studio.patches.tools import (
    _build_apply_patch_metadata,
    acknowledge_patch_operation,
    build_apply_patch_tool,
)


def test_build_apply_patch_metadata__exposes_operation_fields():
    """Schema should describe type/path/diff with the V4A format instructions and be named apply_patch."""
    meta = _build_apply_patch_metadata()

    assert meta.name == "apply_patch"
    assert set(meta.fn_schema.model_fields) == {"type", "path", "diff"}
    assert "*** Begin Patch" in meta.fn_schema.model_fields["diff"].description
    assert meta.description.startswith("Use this tool to edit files by applying patches")


def test_build_apply_patch_tool__uses_metadata():
    tool = build_apply_patch_tool()

    assert tool.metadata.name == "apply_patch"


def test_acknowledge_patch_operation__echoes_operation():
    assert acknowledge_patch_operation("update_file", "system_prompt.txt", "-a\n+b") == (
        "Received update_file for system_prompt.txt"
    )


def test_acknowledge_patch_operation__reports_unsupported_type():
    assert acknowledge_patch_operation("rename_file", "x").startswith("Unsupported apply_patch operation type")
