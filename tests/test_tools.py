"""Tests for tool classification and tool-call variants."""

from typing import Any

import pytest
from pydantic import TypeAdapter, ValidationError

from cc_hook.tools import (
    KNOWN_TOOLS,
    OTHER_TOOL,
    POST_TOOL_VARIANTS,
    PRE_TOOL_VARIANTS,
    BashPostToolCall,
    GrepPreToolCall,
    OtherPostToolCall,
    OtherPreToolCall,
    ReadPreToolCall,
    TodoWritePreToolCall,
    classify,
    tool_union,
)

pre_tool_call = TypeAdapter(tool_union(PRE_TOOL_VARIANTS))
post_tool_call = TypeAdapter(tool_union(POST_TOOL_VARIANTS))


class TestClassify:
    """Tests for classify function."""

    @pytest.mark.parametrize("name", KNOWN_TOOLS)
    def test_known_tools_map_to_themselves(self, name: str) -> None:
        assert classify(name) == name

    @pytest.mark.parametrize(
        "name",
        ["mcp__github__search_repositories", "read", "", "Read ", "Other", "FutureTool"],
    )
    def test_unknown_names_are_other(self, name: str) -> None:
        assert classify(name) == OTHER_TOOL

    @pytest.mark.parametrize("name", [None, 42, ["Read"]])
    def test_non_strings_are_other(self, name: Any) -> None:
        assert classify(name) == OTHER_TOOL

    def test_every_tag_has_a_variant(self) -> None:
        assert set(PRE_TOOL_VARIANTS) == {*KNOWN_TOOLS, OTHER_TOOL}
        assert set(POST_TOOL_VARIANTS) == {*KNOWN_TOOLS, OTHER_TOOL}


class TestPreToolCall:
    """Tests for the PreToolUse tool-call union."""

    def test_parses_known_tool(self) -> None:
        call = pre_tool_call.validate_python(
            {"tool_name": "Read", "tool_input": {"file_path": "/x", "limit": 10}}
        )
        assert isinstance(call, ReadPreToolCall)
        assert call.tag == "Read"
        assert call.tool_input.file_path == "/x"
        assert call.tool_input.limit == 10

    def test_known_tool_rejects_wrong_input(self) -> None:
        """A known tool name never falls back to Other when its input is invalid."""
        with pytest.raises(ValidationError):
            pre_tool_call.validate_python({"tool_name": "Read", "tool_input": {"path": "/x"}})

    def test_known_tool_rejects_unknown_input_keys(self) -> None:
        with pytest.raises(ValidationError):
            pre_tool_call.validate_python(
                {"tool_name": "Write", "tool_input": {"file_path": "/x", "content": "", "mode": 1}}
            )

    def test_does_not_coerce_types(self) -> None:
        with pytest.raises(ValidationError):
            pre_tool_call.validate_python(
                {"tool_name": "Read", "tool_input": {"file_path": "/x", "limit": "10"}}
            )

    def test_grep_flag_aliases(self) -> None:
        call = pre_tool_call.validate_python(
            {"tool_name": "Grep", "tool_input": {"pattern": "TODO", "-i": True, "-C": 2}}
        )
        assert isinstance(call, GrepPreToolCall)
        assert call.tool_input.case_insensitive is True
        assert call.tool_input.context == 2

    def test_todo_items(self) -> None:
        call = pre_tool_call.validate_python(
            {
                "tool_name": "TodoWrite",
                "tool_input": {
                    "todos": [
                        {"content": "Write tests", "status": "in_progress", "activeForm": "Writing tests"}
                    ]
                },
            }
        )
        assert isinstance(call, TodoWritePreToolCall)
        assert call.tool_input.todos[0].active_form == "Writing tests"

    @pytest.mark.parametrize(
        "name", ["mcp__github__search_repositories", "FutureTool", "read"]
    )
    def test_unknown_tool_is_other_and_preserved(self, name: str) -> None:
        tool_input = {"query": "pydantic", "nested": {"list": [1, "two", None]}}
        call = pre_tool_call.validate_python({"tool_name": name, "tool_input": tool_input})
        assert isinstance(call, OtherPreToolCall)
        assert call.tag == OTHER_TOOL
        assert call.tool_name == name
        assert call.tool_input == tool_input

    def test_models_are_frozen(self) -> None:
        call = pre_tool_call.validate_python({"tool_name": "Read", "tool_input": {"file_path": "/x"}})
        with pytest.raises(ValidationError):
            call.tool_name = "Write"  # type: ignore[misc]


class TestPostToolCall:
    """Tests for the PostToolUse tool-call union."""

    def test_bash_response_is_typed(self) -> None:
        call = post_tool_call.validate_python(
            {
                "tool_name": "Bash",
                "tool_input": {"command": "ls"},
                "tool_response": {"stdout": "a\n", "stderr": "", "interrupted": False},
            }
        )
        assert isinstance(call, BashPostToolCall)
        assert call.tool_response.stdout == "a\n"
        assert call.tool_response.interrupted is False

    @pytest.mark.parametrize(
        ("tool_name", "tool_input", "tool_response"),
        [
            ("Bash", {"command": "ls"}, {"stdout": "", "stderr": "", "interrupted": False, "extra": 1}),
            ("Glob", {"pattern": "*.py"}, {"filenames": [], "extra": 1}),
        ],
    )
    def test_typed_response_rejects_unknown_keys(
        self, tool_name: str, tool_input: dict[str, Any], tool_response: dict[str, Any]
    ) -> None:
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            post_tool_call.validate_python(
                {"tool_name": tool_name, "tool_input": tool_input, "tool_response": tool_response}
            )

    def test_open_response_keeps_unknown_keys(self) -> None:
        response = {"filePath": "/x", "success": True}
        call = post_tool_call.validate_python(
            {"tool_name": "Write", "tool_input": {"file_path": "/x", "content": ""}, "tool_response": response}
        )
        assert call.tool_response == response

    def test_missing_response_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            post_tool_call.validate_python({"tool_name": "Bash", "tool_input": {"command": "ls"}})

    def test_other_response_mapping_preserved(self) -> None:
        response = {"content": [{"type": "text", "text": "ok"}], "isError": False}
        call = post_tool_call.validate_python(
            {"tool_name": "mcp__srv__tool", "tool_input": {}, "tool_response": response}
        )
        assert isinstance(call, OtherPostToolCall)
        assert call.tool_response == response

    def test_other_response_string_kept_opaque(self) -> None:
        call = post_tool_call.validate_python(
            {"tool_name": "mcp__srv__tool", "tool_input": {}, "tool_response": '{"ok": true}'}
        )
        assert isinstance(call, OtherPostToolCall)
        assert call.tool_response == '{"ok": true}'
