"""fuaim: Irish vocabulary clusters and dialect pronunciation playback."""
