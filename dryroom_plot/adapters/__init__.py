from .normalize import bundle_from_frame, bundle_from_mapping, normalize_bundle

__all__ = ["bundle_from_frame", "bundle_from_mapping", "normalize_bundle"]
