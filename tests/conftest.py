import pulumi
import pytest

ACCOUNT_ID = "123456789012"
REGION = "eu-west-1"


class CdsMocks(pulumi.runtime.Mocks):
    """
    Records every registered resource, and fills in the outputs AWS would compute (ARNs, generated names).
    """

    def __init__(self):
        self.resources = []

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)

        if args.typ == "aws:s3/bucket:Bucket":
            bucket = outputs.get("bucket") or f"{args.name}-generated"
            outputs.update(
                bucket=bucket,
                arn=f"arn:aws:s3:::{bucket}",
                bucketDomainName=f"{bucket}.s3.amazonaws.com",
            )
        elif args.typ == "aws:kms/key:Key":
            outputs["arn"] = f"arn:aws:kms:{REGION}:{ACCOUNT_ID}:key/{args.name}"
        elif args.typ == "aws:s3/bucketWebsiteConfigurationV2:BucketWebsiteConfigurationV2":
            outputs["websiteEndpoint"] = f"{args.name}.s3-website-{REGION}.amazonaws.com"

        self.resources.append(args)

        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        if args.token == "aws:index/getCallerIdentity:getCallerIdentity":
            return {
                "accountId": ACCOUNT_ID,
                "arn": f"arn:aws:iam::{ACCOUNT_ID}:user/cds",
                "id": ACCOUNT_ID,
                "userId": "AIDACDS",
            }
        if args.token == "aws:index/getPartition:getPartition":
            return {
                "dnsSuffix": "amazonaws.com",
                "id": "aws",
                "partition": "aws",
                "reverseDnsPrefix": "com.amazonaws",
            }
        return {}

    def find(self, typ: str) -> list:
        return [resource for resource in self.resources if resource.typ == typ]


_mocks = CdsMocks()
pulumi.runtime.set_mocks(_mocks, preview=False)
pulumi.runtime.set_config("aws:region", REGION)


@pytest.fixture
def mocks() -> CdsMocks:
    _mocks.resources.clear()
    return _mocks


@pytest.fixture
def bucket_arn() -> str:
    return "arn:aws:s3:::bucket"
