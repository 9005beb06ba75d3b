"""Sample application scanned by the test suite."""
