"""Model DTO parts (one class per module); import via ``base.models``."""
