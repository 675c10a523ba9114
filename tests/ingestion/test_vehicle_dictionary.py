import polars as pl
import pytest
from polars.testing import assert_frame_equal

from ztm_rt.ingestion.vehicle_dictionary import load_vehicle_dictionary
from ztm_rt.runtime_utils.ztm_exception import DictionaryLoadError, ZtmFatalError

from ..test_resources import VEHICLE_DICTIONARY_CSV


def test_load_vehicle_dictionary() -> None:
    """every csv row becomes a table row with inferred column types"""
    dictionary = load_vehicle_dictionary(VEHICLE_DICTIONARY_CSV)

    expected = pl.DataFrame(
        {
            "vehicle_id": [1001, 1002, 1003],
            "label": ["A1", "A2", "A3"],
            "model": ["Solaris Urbino 12", "MAN Lion's City", "Solaris Urbino 18"],
            "low_floor": [True, False, True],
        },
        schema={
            "vehicle_id": pl.Int64,
            "label": pl.String,
            "model": pl.String,
            "low_floor": pl.Boolean,
        },
    )
    assert_frame_equal(dictionary, expected)


def test_schema_inferred_from_full_content() -> None:
    """a column that only turns non-numeric far into the file is a string column"""
    rows = [f"{index},{index}" for index in range(500)] + ["500,T500"]
    payload = ("vehicle_id,side_number\n" + "\n".join(rows) + "\n").encode()

    dictionary = load_vehicle_dictionary(payload)

    assert dictionary.height == 501
    assert dictionary.schema["vehicle_id"] == pl.Int64
    assert dictionary.schema["side_number"] == pl.String
    assert dictionary.item(500, "side_number") == "T500"


def test_empty_dictionary_is_fatal() -> None:
    """unparseable csv raises a fatal DictionaryLoadError"""
    with pytest.raises(DictionaryLoadError) as exc_info:
        load_vehicle_dictionary(b"")

    assert isinstance(exc_info.value, ZtmFatalError)
    assert isinstance(exc_info.value.__cause__, pl.exceptions.PolarsError)
