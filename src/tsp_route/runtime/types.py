from enum import Enum


class Metric(Enum):
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"


class Heuristic(Enum):
    NEAREST_NEIGHBOR = "nearest_neighbor"
    NEAREST_INSERTION = "nearest_insertion"
    FARTHEST_INSERTION = "farthest_insertion"
    CHRISTOFIDES = "christofides"
    MST_PREORDER = "mst_preorder"
    SIMULATED_ANNEALING = "simulated_annealing"
    ALPHANUMERIC_SORT = "alphanumeric_sort"


class EdgeSort(Enum):
    NONE = "none"
    BY_WEIGHT = "by_weight"
    LEAF_FIRST = "leaf_first"
