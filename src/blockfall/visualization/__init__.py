"""pygame front end for Blockfall."""
