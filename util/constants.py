from typing import Final

N_A_STATUS: Final[str] = "n/a"


class InternalURIs:
    API = "/api"
    AUTH_TOKEN = API + "/auth/token"
    MODELS = API + "/models"
    MODEL_STATUS = MODELS + "/{urn:path}/status"
    MODEL_DERIVATIVES = MODELS + "/{urn:path}/derivatives"
    HEALTHZ = "/healthz"


class ExternalURIs:
    TOKEN = "/authentication/v2/token"
    BUCKETS = "/oss/v2/buckets"
    BUCKET_DETAILS = BUCKETS + "/{bucket_key}/details"
    OBJECTS = BUCKETS + "/{bucket_key}/objects"
    OBJECT = OBJECTS + "/{object_key}"
    SIGNED_UPLOAD = OBJECT + "/signeds3upload"
    DERIVATIVE_JOB = "/modelderivative/v2/designdata/job"
    MANIFEST = "/modelderivative/v2/designdata/{urn}/manifest"
