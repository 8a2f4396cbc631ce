# voxelfield

Building blocks for voxel fields: extents and data windows, mappings between
world, local and voxel space, and interpolators that sample a field between
voxel centres. The package has no dependencies outside the standard library.

## Installing

    pip install voxelfield

To run the tests:

    pip install "voxelfield[test]"
    pytest

## Modules

- `voxelfield.vecmath`: the immutable `Vec3`, `Box3` and `Matrix44` types and
  `lerp_factor`. Matrices use the row-vector convention (`v * M`, translation
  in the last row); `Matrix44` has `identity`, `scaling`, `translation`,
  `inverse`, `mult_vec_matrix`, `equal_with_rel_error` and `extract_shrt`,
  which decomposes a matrix into scale, shear, rotation and translation.
- `voxelfield.mapping`: `FieldMapping` maps local space `[0, 1]^3` onto the
  voxel extents (`local_to_voxel`, `local_to_voxel_many`, `voxel_to_local`).
  `NullFieldMapping` carries extents only. `MatrixFieldMapping` places local
  space in the world with a matrix given to `set_local_to_world`, and adds
  `world_to_local`, `world_to_voxel`, `voxel_to_world` and
  `world_voxel_size`. `is_identical` compares two mappings within a tolerance.
- `voxelfield.mapping_io`: `NullFieldMappingIO` and `MatrixFieldMappingIO`
  write a mapping into an attribute dictionary and read it back. The matrix is
  stored as 16 row-major numbers. `MappingIOError` is raised when an
  attribute is missing, malformed, or already present on write.
- `voxelfield.fields`: the abstract `Field` base with `extents`,
  `data_window`, `mapping`, `metadata` and `set_size`; `EmptyField`, which
  stores no voxels and returns its default value for every voxel inside the
  data window (raising `IndexError` outside it); `ProceduralField`, an
  abstract base for fields computed by `ls_sample`; and `FieldMetadata`,
  which holds named integer, float and vector metadata.
- `voxelfield.interp_core`: `monotonic_cubic_interpolant` (cubic Hermite
  interpolation with zero slopes on flat segments, component-wise for
  vectors), `ProceduralFieldLookup`, `ws_sample` for sampling at a
  world-space point, and the checks `is_point_in_field` and
  `is_legal_voxel_coord`.
- `voxelfield.interp`: `LinearFieldInterp`, `CubicFieldInterp`,
  `LinearGenericFieldInterp` and `CubicGenericFieldInterp`. The generic ones
  use a field's `fast_value` accessor when it has one.
- `voxelfield.mac_interp`: `LinearMACFieldInterp` and `CubicMACFieldInterp` for
  face-centred vector fields. They accept any object with a `data_window` and
  the accessors `u`, `v` and `w`.
- `voxelfield.msg`: `print_message` writes a message to standard output,
  prefixing warnings with `WARNING: `.

## Conventions

Interpolators work in voxel space, and voxel centres lie at `.5`
coordinates. Lookups outside the data window are clamped to its edge voxels.
`ws_sample` and `is_point_in_field` need a mapping with world transforms,
such as `MatrixFieldMapping`; with a `NullFieldMapping` they raise
`TypeError`.

## Example

```python
from voxelfield.vecmath import Box3, Vec3
from voxelfield.mapping import MatrixFieldMapping
from voxelfield.mapping_io import MatrixFieldMappingIO

extents = Box3(Vec3(0, 0, 0), Vec3(9, 9, 9))
mapping = MatrixFieldMapping(extents)
vs_p = mapping.world_to_voxel(Vec3(0.5, 0.5, 0.5))   # Vec3(5.0, 5.0, 5.0)

attributes = {}
io = MatrixFieldMappingIO()
io.write(attributes, mapping)
restored = io.read(attributes)
restored.set_extents(extents)   # extents are not part of the stored attributes
assert restored.is_identical(mapping, 1e-9)
```

## What it does not do

- There is no field type that stores voxel values: `EmptyField` and
  `ProceduralField` are the only concrete field bases. Dense, sparse or MAC
  storage has to be supplied by the caller.
- Nothing reads or writes field data files. The mapping readers and writers
  work on an in-memory attribute dictionary only.
- There is no command-line tool.