"""
Unit tests for draft state transitions.
"""

from charters.catalog.schemas import CatalogEntry, CatalogItem
from charters.proposal.actions import apply_actions
from charters.proposal.draft import (
    DraftState,
    active_final_notes,
    clear_all,
    edit_final_notes,
    initial_state,
    mark_sending,
    ordered_selection,
    record_result,
    reset_final_notes_to_default,
    select_all,
    selected_catalog_ids,
    set_client_email,
    set_client_name,
    set_currency,
    set_language,
    set_note,
    set_price,
    to_view,
    toggle_itinerary,
    toggle_selection,
)
from charters.proposal.final_notes import DEFAULT_FINAL_NOTES
from charters.proposal.schemas import (
    EditFinalNotesAction,
    SetLanguageAction,
    SetPriceAction,
    ToggleSelectionAction,
)


def _make_catalog():
    return (
        CatalogEntry(key="a", item=CatalogItem(id="a", name="Alpha")),
        CatalogEntry(key="b", item=CatalogItem(id="b", name="Bravo")),
        CatalogEntry(key="idx-2", item=CatalogItem(name="No id")),
    )


class TestInitialState:
    """Tests for a fresh draft."""

    def test_final_notes_seeded_for_every_language(self):
        state = initial_state()
        assert dict(state.final_notes_by_language) == dict(DEFAULT_FINAL_NOTES)
        assert not any(state.final_notes_touched.values())

    def test_currency_uppercased(self):
        assert initial_state(currency="usd").currency == "USD"

    def test_starting_language(self):
        state = initial_state(language="it")
        assert state.language == "it"
        assert active_final_notes(state) == DEFAULT_FINAL_NOTES["it"]

    def test_nothing_selected(self):
        state = initial_state()
        assert state.selected_keys == ()
        assert state.sending is False
        assert state.last_result is None


class TestSelection:
    """Tests for selection transitions."""

    def test_toggle_adds_then_removes(self):
        state = toggle_selection(initial_state(), "a")
        assert state.selected_keys == ("a",)

        state = toggle_selection(state, "a")
        assert state.selected_keys == ()

    def test_selection_keeps_insertion_order(self):
        state = initial_state()
        for key in ("b", "a", "c"):
            state = toggle_selection(state, key)
        assert state.selected_keys == ("b", "a", "c")

    def test_reselect_restores_price_and_note(self):
        """Deselecting keeps what was typed for the item."""
        state = toggle_selection(initial_state(), "a")
        state = set_price(state, "a", "1.500,00")
        state = set_note(state, "a", "incl. skipper")

        state = toggle_selection(state, "a")
        state = toggle_selection(state, "a")

        assert state.selected_keys == ("a",)
        assert state.prices_by_key["a"] == "1.500,00"
        assert state.notes_by_key["a"] == "incl. skipper"

    def test_select_all_uses_catalog_order(self):
        state = toggle_selection(initial_state(), "b")
        state = select_all(state, ["a", "b", "a", "c"])
        assert state.selected_keys == ("a", "b", "c")

    def test_transitions_do_not_mutate_input(self):
        before = initial_state()
        after = set_price(toggle_selection(before, "a"), "a", "100")

        assert before.selected_keys == ()
        assert "a" not in before.prices_by_key
        assert after.prices_by_key == {"a": "100"}


class TestClearAll:
    """Tests for resetting a draft."""

    def test_resets_item_data_and_final_notes(self):
        state = select_all(initial_state(), ["a", "b"])
        state = set_price(state, "a", "100")
        state = set_note(state, "a", "note")
        state = toggle_itinerary(state, "it-1")
        state = edit_final_notes(state, "custom")
        state = record_result(state, {"ok": True})

        state = clear_all(state)

        assert state.selected_keys == ()
        assert dict(state.prices_by_key) == {}
        assert dict(state.notes_by_key) == {}
        assert state.selected_itinerary_ids == ()
        assert active_final_notes(state) == DEFAULT_FINAL_NOTES["en"]
        assert state.final_notes_touched["en"] is False
        assert state.final_notes_enabled is True
        assert state.last_result is None

    def test_keeps_client_and_configuration(self):
        state = set_client_name(initial_state(language="es"), "Ana")
        state = set_client_email(state, "ana@example.com")
        state = set_currency(state, "usd")

        state = clear_all(state)

        assert state.client_name == "Ana"
        assert state.client_email == "ana@example.com"
        assert state.language == "es"
        assert state.currency == "USD"


class TestLanguageAndFinalNotes:
    """Tests for per-language final notes."""

    def test_set_language_seeds_missing_text(self):
        """A language without text gets its default."""
        state = set_language(DraftState(), "pt")
        assert state.final_notes_by_language["pt"] == DEFAULT_FINAL_NOTES["pt"]
        assert state.final_notes_touched["pt"] is False

    def test_set_language_keeps_other_edits(self):
        state = edit_final_notes(initial_state(), "my english notes")
        state = set_language(state, "fr")
        state = set_language(state, "en")

        assert active_final_notes(state) == "my english notes"
        assert state.final_notes_touched["en"] is True

    def test_unknown_language_seeds_empty_text(self):
        assert active_final_notes(set_language(DraftState(), "nl")) == ""

    def test_edit_marks_touched(self):
        state = edit_final_notes(initial_state(), "custom")
        assert active_final_notes(state) == "custom"
        assert to_view(state)["finalNotesTouched"] is True

    def test_reset_restores_default(self):
        state = edit_final_notes(initial_state(language="de"), "custom")
        state = reset_final_notes_to_default(state)

        assert active_final_notes(state) == DEFAULT_FINAL_NOTES["de"]
        assert state.final_notes_touched["de"] is False

    def test_empty_edit_is_kept(self):
        """An emptied text stays empty; it is not reseeded."""
        state = edit_final_notes(initial_state(), "")
        state = set_language(set_language(state, "it"), "en")
        assert active_final_notes(state) == ""


class TestConfiguration:
    """Tests for currency, itineraries and submission status."""

    def test_currency_uppercased(self):
        assert set_currency(initial_state(), "gbp").currency == "GBP"

    def test_toggle_itinerary(self):
        state = toggle_itinerary(initial_state(), "it-1")
        state = toggle_itinerary(state, "it-2")
        assert state.selected_itinerary_ids == ("it-1", "it-2")

        state = toggle_itinerary(state, "it-1")
        assert state.selected_itinerary_ids == ("it-2",)

    def test_sending_lifecycle(self):
        state = record_result(initial_state(), {"ok": False})
        state = mark_sending(state)
        assert state.sending is True
        assert state.last_result is None

        state = record_result(state, {"ok": True})
        assert state.sending is False
        assert state.last_result == {"ok": True}


class TestSelectedCatalogIds:
    """Tests for the selection notification ids."""

    def test_catalog_order_without_fallback_keys(self):
        state = initial_state()
        for key in ("idx-2", "b", "a"):
            state = toggle_selection(state, key)

        assert selected_catalog_ids(state, _make_catalog()) == ["a", "b"]

    def test_nothing_selected(self):
        assert selected_catalog_ids(initial_state(), _make_catalog()) == []

    def test_ordered_selection_follows_catalog(self):
        state = initial_state()
        for key in ("b", "gone", "a"):
            state = toggle_selection(state, key)

        assert ordered_selection(state, ["a", "b", "idx-2"]) == ["a", "b"]
        assert ordered_selection(state) == ["b", "gone", "a"]


class TestApplyActions:
    """Tests for dispatching API actions."""

    def test_actions_applied_in_order(self):
        state = apply_actions(
            initial_state(),
            [
                ToggleSelectionAction(type="toggle_selection", key="a"),
                SetPriceAction(type="set_price", key="a", value="2.000"),
                SetLanguageAction(type="set_language", language="es"),
                EditFinalNotesAction(type="edit_final_notes", text="hola"),
            ],
            ["a", "b"],
        )

        assert state.selected_keys == ("a",)
        assert state.prices_by_key["a"] == "2.000"
        assert state.language == "es"
        assert active_final_notes(state) == "hola"
        assert state.final_notes_by_language["en"] == DEFAULT_FINAL_NOTES["en"]

    def test_view_is_camel_case(self):
        view = to_view(initial_state())
        assert view["selectedKeys"] == []
        assert view["finalNotesEnabled"] is True
        assert view["finalNotes"] == DEFAULT_FINAL_NOTES["en"]
        assert view["lastResult"] is None
