import io

from three_edge_connected.analyse import gfa_three_edge_components
from three_edge_connected.report import components_to_df, write_components


def test_write_components_skips_singletons():
    stream = io.StringIO()
    written = write_components(stream, ["a", "b", "c", "d"], [[2], [0, 3, 1]])
    assert written == 1
    assert stream.getvalue() == "a\td\tb\n"

    stream = io.StringIO()
    write_components(stream, ["a", "b", "c", "d"], [[2], [0, 3, 1]], min_size=1)
    assert stream.getvalue() == "c\na\td\tb\n"


def test_components_to_df():
    df = components_to_df([[2], [0, 1]], ["a", "b", "c"])
    assert list(df.columns) == ["component", "node", "name", "component_size"]
    assert df["name"].tolist() == ["c", "a", "b"]
    assert df.component_size.tolist() == [1, 2, 2]

    df = components_to_df([[1, 0]])
    assert df["name"].tolist() == ["1", "0"]


# a and b joined by three links, c hanging off b
GFA = [
    "L\ta\t+\tb\t+\t0M\n",
    "L\ta\t-\tb\t-\t0M\n",
    "L\tb\t+\ta\t+\t0M\n",
    "L\tb\t+\tc\t+\t0M\n",
]


def test_gfa_three_edge_components(capsys):
    graph, components = gfa_three_edge_components(GFA, canonical=True, verbose=True)
    assert graph.inv_names == ["a", "b", "c"]
    assert components == [[0, 1], [2]]
    out = capsys.readouterr().out
    assert "Reading GFA links." in out
    assert "Finding 3-edge-connected components" in out


def test_gfa_three_edge_components_quiet(capsys):
    gfa_three_edge_components(GFA)
    assert capsys.readouterr().out == ""
