def test_imports():
    import wkbflat
    from wkbflat import BoundsPolicy, ByteOrder, FlatCoordsCodec, GeometryType, GeometryTooLarge
    assert hasattr(wkbflat, "__version__")
    assert BoundsPolicy and ByteOrder and FlatCoordsCodec and GeometryType and GeometryTooLarge
