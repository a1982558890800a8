"""
Service layer abstraction.

Each service encapsulates the catalog logic: loading and validating
the JSON source, caching it with a time-to-live, and answering
queries against the loaded dataset.  API handlers only talk to this
layer and never parse the source themselves.
"""
