"""Application ports (Protocols) implemented by infrastructure and presentation."""
