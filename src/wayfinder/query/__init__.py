"""Query readers, typed getters, and the default serializer."""
