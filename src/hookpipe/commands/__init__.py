"""CLI sub-commands registered on the root application in :mod:`hookpipe.app`."""
