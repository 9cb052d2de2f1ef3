from reuleauxmesh.mesh import Mesh
from reuleauxmesh.errors import (
    ReuleauxMeshError,
    InvalidSampleStepError,
    InvalidWarpError,
    DegenerateTopologyError,
    GeometricInfeasibilityError,
)
from reuleauxmesh.reuleaux_tetrahedron import (
    curved_base_face,
    mesh_reuleaux_tetrahedron,
    reference_vertices,
)
