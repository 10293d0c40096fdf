"""
DevConnector Backend — Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract with the web client.
How:   FastAPI validates request bodies against the *Request models and
       serializes responses through the *Response models. Response models
       list their fields explicitly, so stored-only fields (the password
       hash) never reach a client.
"""
