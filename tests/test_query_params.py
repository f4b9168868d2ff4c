from sim_mcp.sim_api import build_query_params


def test_none_values_are_omitted():
    assert build_query_params([("limit", None), ("tx_hash", None)]) == {}


def test_lists_are_comma_joined_in_order():
    assert build_query_params([("chain_ids", ["10", "1", "8453"])]) == {"chain_ids": "10,1,8453"}


def test_booleans_render_lowercase():
    query = build_query_params([("exclude_spam_tokens", True), ("other", False)])
    assert query == {"exclude_spam_tokens": "true", "other": "false"}


def test_integral_floats_drop_the_fraction():
    query = build_query_params([("limit", 10.0), ("after_timestamp", 1.5)])
    assert query == {"limit": "10", "after_timestamp": "1.5"}


def test_order_follows_input_and_empty_strings_are_kept():
    query = build_query_params([("b", "x"), ("a", ""), ("c", 0)])
    assert list(query.items()) == [("b", "x"), ("a", ""), ("c", "0")]
