import pytest
from hypothesis import given, settings, strategies as st

from chartrender.exceptions import NoTableError, NoValueError
from chartrender.values import Values, join_path

keys = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=8)
scalars = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=10))
tables = st.recursive(
    st.dictionaries(keys, scalars, max_size=4),
    lambda children: st.dictionaries(keys, st.one_of(scalars, children), max_size=4),
    max_leaves=20,
)


def _leaf_paths(table: dict[str, object], prefix: tuple[str, ...] = ()):
    for key, value in table.items():
        path = (*prefix, key)
        if isinstance(value, dict):
            yield from _leaf_paths(value, path)
        else:
            yield path, value


@settings(deadline=None)
@given(data=tables)
def test_path_value_finds_every_leaf(data: dict[str, object]) -> None:
    values = Values(data)
    for path, expected in _leaf_paths(data):
        assert values.path_value(join_path(*path)) == expected


@settings(deadline=None)
@given(data=tables, path=st.lists(keys, min_size=1, max_size=4))
def test_table_lookup_never_raises_unexpected_errors(
    data: dict[str, object], path: list[str]
) -> None:
    values = Values(data)
    try:
        result = values.table(join_path(*path))
    except NoTableError as e:
        assert e.key in path
    else:
        assert isinstance(result, Values)


@settings(deadline=None)
@given(data=tables, path=st.lists(keys, min_size=1, max_size=4))
def test_path_value_never_returns_tables(
    data: dict[str, object], path: list[str]
) -> None:
    values = Values(data)
    try:
        result = values.path_value(join_path(*path))
    except NoValueError as e:
        assert e.key == path[-1]
    else:
        assert not isinstance(result, dict)


@given(name=keys)
def test_empty_values_have_no_tables(name: str) -> None:
    with pytest.raises(NoTableError):
        _ = Values().table(name)
