"""Domain exceptions raised by the services layer."""
