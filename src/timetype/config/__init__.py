"""CLI settings and logging setup. The codecs never import from here."""
