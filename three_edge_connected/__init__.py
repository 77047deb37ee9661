from .algorithm import three_edge_connect, three_edge_connected_components
from .graph import Graph
from .state import State
