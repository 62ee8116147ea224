from .manifold import ChartManifold, Manifold
from .lie_group import LieGroup
from .matrix_lie_group import MatrixLieGroup
from .s1 import S1
from .so2 import SO2
from .so3 import SO3
from .se2 import SE2
from .se3 import SE3
from .r import R, R1, R2, R3
from .direct_product import CompoundManifold
