"""Domain layer: catalog types, ports and the reconciliation core."""
