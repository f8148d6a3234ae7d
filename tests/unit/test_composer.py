"""Unit tests for request composition."""

import pytest_check as check

from src.chat.composer import ROLE_TO_WIRE, build_user_text, compose_request, display_text
from src.models.schemas import Role, Turn, WireRole


def turn(turn_id: str, role: Role, content: str) -> Turn:
    return Turn(id=turn_id, role=role, content=content)


class TestComposeRequest:
    """Tests for compose_request."""

    def test_appends_new_user_entry(self) -> None:
        """Prior user turn plus new input gives two user entries."""
        payload = compose_request([turn("1", Role.USER, "hi")], "2+2?")

        check.equal(
            [(entry.role, entry.text) for entry in payload.history],
            [(WireRole.USER, "hi"), (WireRole.USER, "2+2?")],
        )

    def test_maps_assistant_to_model(self) -> None:
        """Assistant turns are sent with the model role, content verbatim."""
        prior = [
            turn("1", Role.ASSISTANT, "Hello! How can I help?"),
            turn("2", Role.USER, "Explain  spacing\n"),
            turn("3", Role.ASSISTANT, "Sure."),
        ]

        payload = compose_request(prior, "thanks")

        check.equal(
            [entry.role for entry in payload.history],
            [WireRole.MODEL, WireRole.USER, WireRole.MODEL, WireRole.USER],
        )
        check.equal(payload.history[1].text, "Explain  spacing\n")

    def test_empty_history(self) -> None:
        """With no prior turns the payload holds only the new entry."""
        payload = compose_request([], "first")

        check.equal(len(payload.history), 1)
        check.equal(payload.history[0].role, WireRole.USER)

    def test_is_deterministic(self) -> None:
        """Same inputs always produce equal payloads."""
        prior = (turn("1", Role.USER, "a"), turn("2", Role.ASSISTANT, "b"))

        assert compose_request(prior, "c") == compose_request(prior, "c")

    def test_does_not_modify_prior_turns(self) -> None:
        """The caller's sequence is left untouched."""
        prior = [turn("1", Role.USER, "a")]

        compose_request(prior, "b")

        assert prior == [turn("1", Role.USER, "a")]

    def test_role_mapping_is_bijective(self) -> None:
        """Each local role maps to a distinct wire role and all are covered."""
        check.equal(set(ROLE_TO_WIRE), set(Role))
        check.equal(set(ROLE_TO_WIRE.values()), set(WireRole))

    def test_request_body_shape(self) -> None:
        """Payload serializes to the contents/parts JSON body."""
        payload = compose_request([turn("1", Role.ASSISTANT, "hey")], "hello")

        assert payload.to_request_body() == {
            "contents": [
                {"role": "model", "parts": [{"text": "hey"}]},
                {"role": "user", "parts": [{"text": "hello"}]},
            ]
        }


class TestUserText:
    """Tests for build_user_text and display_text."""

    def test_typed_text_only(self) -> None:
        """Without a document the request text is the stripped input."""
        check.equal(build_user_text("  hello  "), "hello")

    def test_document_section_is_delimited(self) -> None:
        """Document text follows a header naming its source."""
        text = build_user_text("Summarize", "report.pdf", "page one\n")

        check.equal(text, "Summarize\n\n--- Content from report.pdf ---\npage one\n")

    def test_document_without_typed_text(self) -> None:
        """Document-only submissions still carry the section header."""
        text = build_user_text("", "report.pdf", "body\n")

        check.is_true(text.startswith("\n\n--- Content from report.pdf ---\n"))

    def test_display_text_prefers_typed_text(self) -> None:
        """Visible user turn shows what was typed."""
        check.equal(display_text(" question ", "report.pdf"), "question")

    def test_display_text_falls_back_to_file_name(self) -> None:
        """Visible user turn names the file when nothing was typed."""
        check.equal(display_text("   ", "report.pdf"), "File uploaded: report.pdf")
