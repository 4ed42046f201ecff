"""GUI-agnostic core: codec, externalizer, session, services and menu builder."""
