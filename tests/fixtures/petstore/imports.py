from outside.components import OutsideManaged, OutsideResource  # noqa: F401
