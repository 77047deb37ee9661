class ThreeEdgeConnectedError(Exception):
    pass


class GFAParseError(ThreeEdgeConnectedError):
    pass


class MalformedGraphError(ThreeEdgeConnectedError):
    pass
