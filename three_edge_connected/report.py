import typing

import pandas as pd


def write_components(
    stream: typing.TextIO,
    inv_names: typing.Sequence[str],
    components: typing.Iterable[typing.Sequence[int]],
    min_size: int = 2,
) -> int:
    """Write components one per line, as tab-separated node names.

    Arguments:
        stream (TextIO): where to write.
        inv_names (Sequence[str]): node names by node index.
        components (iterable): lists of node indices.
        min_size (int): smaller components are skipped. The default skips singletons.

    Returns:
        int: the number of written components.
    """
    written = 0
    for component in components:
        if len(component) >= min_size:
            stream.write("\t".join(inv_names[n] for n in component))
            stream.write("\n")
            written += 1
    return written


def components_to_df(
    components: typing.Sequence[typing.Sequence[int]],
    inv_names: typing.Sequence[str] | None = None,
) -> pd.DataFrame:
    """Tabulate components, one row per node."""
    df = pd.DataFrame(
        [(component_id, node) for component_id, component in enumerate(components) for node in component],
        columns=["component", "node"],
    )
    df["name"] = df.node.map(lambda n: inv_names[n]) if inv_names is not None else df.node.astype(str)
    df["component_size"] = df.groupby("component").node.transform("size")
    return df
