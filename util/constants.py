class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    VERIFY = V1 + "/verify"
    HEALTHZ = "/healthz"
