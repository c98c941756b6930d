"""
Pydantic datamodels used by the Color Changer runtime.

Split into:
- session_models: Session + SessionMode
- request_models: inbound platform requests (launch, intent, hardware report, end)
- api_models: HTTP request/response schemas
"""
