from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence, cast
from urllib import request

from ztm_rt.runtime_utils.process_logger import ProcessLogger
from ztm_rt.runtime_utils.remote_files import is_http_url
from ztm_rt.runtime_utils.ztm_exception import ResourceFetchError


def fetch_resource(url: str) -> bytes:
    """
    retrieve the raw bytes of an http(s) or local resource. this function is
    executed inside of a thread.

    :param url: http(s) url or local file path

    :return bytes of the resource
    """
    logger = ProcessLogger("fetch_resource", url=url)
    logger.log_start()

    try:
        if is_http_url(url):
            with request.urlopen(url) as response:
                payload = response.read()
        else:
            with open(url, "rb") as f:
                payload = f.read()
    except Exception as exception:
        logger.log_failure(exception)
        raise ResourceFetchError(url) from exception

    logger.add_metadata(payload_bytes=len(payload), print_log=False)
    logger.log_complete()

    return payload


def fetch_resources(
    urls: Sequence[str],
    max_workers: Optional[int] = None,
    fetch: Callable[[str], bytes] = fetch_resource,
) -> List[bytes]:
    """
    retrieve every resource concurrently

    results are returned in the order of urls regardless of the order fetches
    complete in. the first failure aborts the batch: fetches that have not
    started are cancelled, fetches already in flight finish but their payloads
    are discarded, and the failure is raised.

    :param urls: ordered resource identifiers
    :param max_workers: upper bound on parallel fetches, never more than
        len(urls)
    :param fetch: function mapping one identifier to its bytes

    :return payloads index aligned with urls
    """
    if len(urls) == 0:
        return []

    workers = min(max_workers or len(urls), len(urls))

    process_logger = ProcessLogger("fetch_resources", resource_count=len(urls), max_workers=workers)
    process_logger.log_start()

    payloads: List[Optional[bytes]] = [None] * len(urls)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures: Dict[Future[bytes], int] = {pool.submit(fetch, url): index for index, url in enumerate(urls)}
        try:
            for future in as_completed(futures):
                payloads[futures[future]] = future.result()
        except Exception as exception:
            for pending in futures:
                pending.cancel()
            process_logger.log_failure(exception)
            if isinstance(exception, ResourceFetchError):
                raise
            raise ResourceFetchError(urls[futures[future]]) from exception

    process_logger.log_complete()

    return cast(List[bytes], payloads)
