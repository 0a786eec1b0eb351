#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the renderer's container stack."""

import pytest

from mdcanon.renderers._containers import BlockQuoteFrame, CodeIndentFrame, ContainerStack, ListFrame


@pytest.fixture
def stack() -> ContainerStack:
    return ContainerStack(blockquote_marker=">", bullet="-")


@pytest.mark.unit
class TestContainerStack:
    """Test padding computation and stack bookkeeping."""

    def test_empty_padding(self, stack: ContainerStack) -> None:
        """Test that an empty stack contributes no padding."""
        assert stack.padding() == ""
        assert not stack
        assert stack.top is None
        assert stack.pop() is None

    def test_blockquote_padding(self, stack: ContainerStack) -> None:
        """Test one prefix per open block quote."""
        stack.push(BlockQuoteFrame())
        stack.push(BlockQuoteFrame())
        assert stack.padding() == "> > "

    def test_custom_blockquote_marker(self) -> None:
        """Test a configured block quote marker."""
        stack = ContainerStack(blockquote_marker="|", bullet="-")
        stack.push(BlockQuoteFrame())
        assert stack.padding() == "| "

    def test_code_indent_padding(self, stack: ContainerStack) -> None:
        """Test the four-space indent of an indented code block."""
        stack.push(CodeIndentFrame())
        assert stack.padding() == "    "

    def test_bullet_marker_written_once(self, stack: ContainerStack) -> None:
        """Test that the bullet appears on the first line only."""
        frame = ListFrame()
        stack.push(frame)
        assert stack.padding() == "- "
        assert frame.marker_written
        assert stack.padding() == "  "

    def test_ordered_marker_width(self, stack: ContainerStack) -> None:
        """Test that continuation padding matches the ordinal width."""
        stack.push(ListFrame(ordinal="10"))
        assert stack.padding() == "10. "
        assert stack.padding() == "    "

    def test_start_item_resets_marker(self, stack: ContainerStack) -> None:
        """Test that starting a new item writes the marker again."""
        frame = ListFrame()
        stack.push(frame)
        stack.padding()
        frame.separated = True
        frame.start_item()
        assert not frame.separated
        assert stack.padding() == "- "

    def test_nested_padding(self, stack: ContainerStack) -> None:
        """Test a list inside a block quote."""
        stack.push(BlockQuoteFrame())
        stack.push(ListFrame(ordinal="1"))
        assert stack.padding() == "> 1. "
        assert stack.padding() == ">    "

    def test_top_list_and_in_list(self, stack: ContainerStack) -> None:
        """Test innermost-list and any-list queries."""
        stack.push(ListFrame())
        stack.push(BlockQuoteFrame())
        assert stack.top_list is None
        assert stack.in_list()
        stack.pop()
        assert isinstance(stack.top_list, ListFrame)
        stack.pop()
        assert not stack.in_list()
