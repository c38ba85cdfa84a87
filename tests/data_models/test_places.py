from donorlink_functions.data_models.places import (
    AutocompleteRequest,
    Enriched,
    PlaceDetailResult,
    SearchResultItem,
    Suggestion,
    Unenriched,
)


def test_result_item_from_enriched_suggestion(make_suggestion):
    suggestion = Suggestion.model_validate(
        make_suggestion("p1", main="Main St", secondary="Springfield, IL, USA")
    )

    item = SearchResultItem.from_suggestion(suggestion, Enriched(lat=39.8, lng=-89.6))

    assert item.model_dump(by_alias=True) == {
        "placeId": "p1",
        "description": "Main St, Springfield, IL, USA",
        "mainText": "Main St",
        "secondaryText": "Springfield, IL, USA",
        "lat": 39.8,
        "lng": -89.6,
        "enriched": True,
    }


def test_result_item_from_bare_suggestion():
    item = SearchResultItem.from_suggestion(
        Suggestion.model_validate({}), Unenriched(reason="missing place id")
    )

    assert item.place_id == ""
    assert item.description == ""
    assert item.main_text == ""
    assert item.secondary_text == ""
    assert item.lat is None and item.lng is None
    assert item.enriched is False


def test_query_suggestions_without_place_prediction_are_kept():
    # Query predictions carry no placePrediction; they still map to an item.
    suggestion = Suggestion.model_validate({"queryPrediction": {"text": {"text": "pizza"}}})

    item = SearchResultItem.from_suggestion(suggestion, Unenriched(reason="missing place id"))

    assert item.place_id == ""


def test_autocomplete_request_omits_unset_filters():
    request = AutocompleteRequest(input="x", included_primary_types=["locality"])

    assert request.model_dump(by_alias=True, exclude_none=True) == {
        "input": "x",
        "includedPrimaryTypes": ["locality"],
    }


def test_place_detail_result_wire_format():
    result = PlaceDetailResult(lat=1.0, lng=2.0)

    assert result.model_dump(by_alias=True) == {"lat": 1.0, "lng": 2.0, "name": ""}
