import autowire_missing_dependency  # noqa: F401
