from .binheap import (BinNode, BinomialForest, EmptyQueueError,
                      forest_from_children, forest_of_singleton, heap_union,
                      heap_view, link)
from .version import __version__
