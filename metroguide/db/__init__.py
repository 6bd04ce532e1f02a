"""
노선/역 데이터 로드 및 캐시 세팅
"""

from metroguide.db.cache import (
    initialize_cache,
    load_network,
    build_network,
    clear_cache,
    reload_cache,
    get_lines_list,
    get_stations_list,
    get_stations_dict,
    get_lines_dict,
    get_station_by_id,
    get_station_id_by_name,
    search_stations_by_name,
    normalize_string,
)

__all__ = [
    "initialize_cache",
    "load_network",
    "build_network",
    "clear_cache",
    "reload_cache",
    "get_lines_list",
    "get_stations_list",
    "get_stations_dict",
    "get_lines_dict",
    "get_station_by_id",
    "get_station_id_by_name",
    "search_stations_by_name",
    "normalize_string",
]
