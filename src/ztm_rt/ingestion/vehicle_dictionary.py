import polars as pl

from ztm_rt.runtime_utils.process_logger import ProcessLogger
from ztm_rt.runtime_utils.ztm_exception import DictionaryLoadError


def load_vehicle_dictionary(payload: bytes) -> pl.DataFrame:
    """
    parse the vehicle dictionary csv into a dataframe

    the csv must start with a header row. column types are inferred from every
    row rather than a leading sample, so a column that only turns non-numeric
    late in the file is still read as a string.

    :param payload: raw csv bytes

    :return dataframe with one row per csv record
    """
    process_logger = ProcessLogger("load_vehicle_dictionary", payload_bytes=len(payload))
    process_logger.log_start()

    try:
        dictionary = pl.read_csv(payload, has_header=True, infer_schema_length=None)
    except pl.exceptions.PolarsError as exception:
        process_logger.log_failure(exception)
        raise DictionaryLoadError(f"Unable to parse vehicle dictionary: {exception}") from exception

    process_logger.add_metadata(
        row_count=dictionary.height,
        column_count=dictionary.width,
        print_log=False,
    )
    process_logger.log_complete()

    return dictionary
