"""Pure domain rules (records, parsing, validation) with no I/O."""
