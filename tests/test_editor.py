import pytest

from memory_bank_mcp.documents import (
    DecisionRecord,
    ProgressSnapshot,
    SectionNotFoundError,
    SessionUpdate,
    append_decision,
    append_progress,
    merge_active_context,
)
from memory_bank_mcp.documents.editor import render_decision
from memory_bank_mcp.documents.markdown import MarkdownDocument

EMPTY_LOG = "# Decision Log\n\n## Technical Decisions\n\n## Pending Decisions\n"


def _decision(title: str, status: str = "accepted", **extra) -> DecisionRecord:
    return DecisionRecord(
        title=title,
        description=f"{title} description",
        rationale=f"{title} rationale",
        status=status,
        date="2026-01-02",
        **extra,
    )


def _section(text: str, heading: str) -> str:
    start = text.index(f"## {heading}")
    rest = text[start + 3 :]
    end = rest.find("\n## ")
    return rest if end == -1 else rest[:end]


def test_merge_active_context_appends_session_update() -> None:
    current = "# Active Context\n\n## Current Session\n"
    update = SessionUpdate.model_validate(
        {"currentSession": {"date": "2026-01-02", "mode": "code", "task": "Write tests"}}
    )

    merged = merge_active_context(current, update)

    assert merged.startswith(current)
    assert len(merged) > len(current)
    suffix = merged[len(current) :]
    assert "## Session Update (2026-01-02)" in suffix
    assert "- Mode: code" in suffix
    assert "- Task: Write tests" in suffix


def test_merge_active_context_accepts_arbitrary_text() -> None:
    update = SessionUpdate.model_validate({"currentSession": {"mode": "debug", "task": "Fix"}})

    merged = merge_active_context("no headings at all", update, date="2026-03-04")

    assert merged == "no headings at all\n\n## Session Update (2026-03-04)\n- Mode: debug\n- Task: Fix\n"


def test_render_decision_includes_optional_fields() -> None:
    decision = _decision(
        "Use SQLite",
        impact="Low",
        alternatives=["Postgres", "Files"],
        related_decisions=["Pick ORM"],
    )

    assert render_decision(decision) == (
        "### Use SQLite (2026-01-02)\n"
        "Use SQLite description\n"
        "\n"
        "Status: accepted\n"
        "Impact: Low\n"
        "\n"
        "Rationale:\n"
        "Use SQLite rationale\n"
        "\n"
        "Alternatives Considered:\n"
        "- Postgres\n"
        "- Files\n"
        "\n"
        "Related Decisions:\n"
        "- Pick ORM"
    )


def test_render_decision_omits_absent_optional_fields() -> None:
    rendered = render_decision(_decision("Plain"))

    assert "Impact:" not in rendered
    assert "Alternatives Considered:" not in rendered
    assert "Related Decisions:" not in rendered


def test_accepted_decision_lands_in_technical_section() -> None:
    updated = append_decision(EMPTY_LOG, _decision("Accepted one"))

    assert updated == (
        "# Decision Log\n\n## Technical Decisions\n\n"
        + render_decision(_decision("Accepted one"))
        + "\n\n## Pending Decisions\n"
    )
    assert "Accepted one" not in _section(updated, "Pending Decisions")


def test_proposed_decision_lands_in_pending_section() -> None:
    updated = append_decision(EMPTY_LOG, _decision("Maybe later", status="proposed"))

    assert "Maybe later" in _section(updated, "Pending Decisions")
    assert "Maybe later" not in _section(updated, "Technical Decisions")


@pytest.mark.parametrize("status", ["rejected", "superseded"])
def test_closed_statuses_use_technical_section(status: str) -> None:
    updated = append_decision(EMPTY_LOG, _decision("Closed", status=status))

    assert "Closed" in _section(updated, "Technical Decisions")


def test_append_decision_preserves_existing_entries_and_order() -> None:
    text = EMPTY_LOG
    for title in ("First", "Second", "Third"):
        text = append_decision(text, _decision(title))
    text = append_decision(text, _decision("Pending", status="proposed"))

    technical = _section(text, "Technical Decisions")
    positions = [technical.index(f"### {title} (") for title in ("First", "Second", "Third")]
    assert positions == sorted(positions)
    assert text.startswith("# Decision Log\n")


def test_append_decision_reports_missing_section() -> None:
    with pytest.raises(SectionNotFoundError):
        append_decision("# Decision Log\n\n## Technical Decisions\n", _decision("Later", status="proposed"))


def test_progress_block_markers_and_empty_blocked() -> None:
    snapshot = ProgressSnapshot.model_validate(
        {"completed": ["A", "B"], "inProgress": ["C"], "blocked": []}
    )

    updated = append_progress("# Progress Log\n", snapshot, date="2026-01-02")
    block = updated[len("# Progress Log\n") :]

    assert "- ✓ A" in block
    assert "- ✓ B" in block
    assert "- → C" in block
    assert "Blocked:" not in block
    assert block == "\n## Update (2026-01-02)\n\nCompleted:\n- ✓ A\n- ✓ B\n\nIn Progress:\n- → C\n"


def test_progress_block_lists_blocked_items_in_caller_order() -> None:
    snapshot = ProgressSnapshot.model_validate(
        {"completed": [], "inProgress": ["z", "a"], "blocked": ["waiting", "review"]}
    )

    updated = append_progress("# Progress Log\n", snapshot, date="2026-01-02")

    assert "Completed:" not in updated
    assert updated.index("- → z") < updated.index("- → a")
    assert "Blocked:\n- ⚠ waiting\n- ⚠ review" in updated


def test_decision_text_cannot_open_a_new_section() -> None:
    decision = DecisionRecord(
        title="Split storage",
        description="Moves blobs out.\n## Pending Decisions\nSee below.",
        rationale="## Notes",
        date="2026-01-02",
    )

    rendered = render_decision(decision)
    updated = append_decision(EMPTY_LOG, decision)

    assert "\\## Pending Decisions" in rendered
    assert "\\## Notes" in rendered
    assert MarkdownDocument.parse(updated).headings == [
        "Technical Decisions",
        "Pending Decisions",
    ]

    proposed = append_decision(updated, _decision("Add cache", status="proposed"))
    pending = MarkdownDocument.parse(proposed).find("Pending Decisions")
    assert pending is not None
    assert "### Add cache (2026-01-02)" in pending.body
