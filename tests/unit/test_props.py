"""Unit tests for property resolution and validation."""

import json
import pytest
from aws_cdk import aws_iam as iam
from vscode_server.enums import LinuxArchitectureType, LinuxFlavorType
from vscode_server.exceptions import (
    ConflictingOptionError,
    InvalidOptionError,
    MissingDependencyError,
)
from vscode_server.props import (
    ResolvedVSCodeServerProps,
    VSCodeServerProps,
    resolve_props,
)

CERTIFICATE_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/abc-123"


@pytest.fixture
def full_props():
    """Props with every field set."""
    return VSCodeServerProps(
        vscode_user="dev",
        vscode_password="s3cret",
        instance_name="MyServer",
        instance_volume_size=100,
        instance_class="c7i",
        instance_size="2xlarge",
        instance_operating_system=LinuxFlavorType.AMAZON_LINUX_2023,
        instance_cpu_architecture=LinuxArchitectureType.AMD64,
        home_folder="/home/dev/project",
        dev_server_base_path="preview",
        dev_server_port=3000,
        additional_instance_role_policies=(
            {
                "Effect": "Allow",
                "Action": ["codebuild:*"],
                "Resource": "*",
            },
        ),
        additional_tags={"team": "platform"},
        domain_name="vscode.example.com",
        certificate_arn=CERTIFICATE_ARN,
        auto_create_certificate=False,
    )


class TestDefaults:
    """Test cases for default resolution."""

    def test_empty_props_resolve_to_defaults(self):
        """Test that empty props resolve to the documented defaults."""
        resolved = resolve_props(VSCodeServerProps())

        assert resolved.instance_cpu_architecture is LinuxArchitectureType.ARM
        assert resolved.instance_operating_system is LinuxFlavorType.UBUNTU_22
        assert resolved.instance_volume_size == 40
        assert resolved.home_folder == "/Workshop"
        assert resolved.dev_server_base_path == "app"
        assert resolved.dev_server_port == 8081
        assert resolved.vscode_user == "participant"
        assert resolved.instance_class == "m7g"
        assert resolved.instance_size == "xlarge"
        assert resolved.instance_name == "VSCodeServer"
        assert resolved.additional_instance_role_policies == ()
        assert resolved.additional_tags == {}
        assert resolved.auto_create_certificate is False
        assert resolved.domain_name is None
        assert resolved.certificate_arn is None
        assert resolved.hosted_zone_id is None

    def test_none_resolves_like_empty_props(self):
        """Test that no props at all resolve to the defaults."""
        assert resolve_props(None) == resolve_props(VSCodeServerProps())

    def test_missing_password_is_marked_for_generation(self):
        """Test that an absent password is left for the engine."""
        resolved = resolve_props(VSCodeServerProps())
        assert resolved.vscode_password is None
        assert resolved.needs_generated_password is True

    def test_empty_password_is_marked_for_generation(self):
        """Test that an empty password is kept but still generated."""
        resolved = resolve_props(VSCodeServerProps(vscode_password=""))
        assert resolved.vscode_password == ""
        assert resolved.needs_generated_password is True

    def test_explicit_password_is_kept(self):
        """Test that an explicit password is not generated."""
        resolved = resolve_props(VSCodeServerProps(vscode_password="s3cret"))
        assert resolved.vscode_password == "s3cret"
        assert resolved.needs_generated_password is False

    def test_default_tags_are_not_shared(self):
        """Test that resolved collections are independent copies."""
        first = resolve_props(VSCodeServerProps())
        second = resolve_props(VSCodeServerProps())
        assert first.additional_tags is not second.additional_tags

    def test_derived_values(self):
        """Test instance type and machine image derived from the props."""
        resolved = resolve_props(VSCodeServerProps(instance_size="large"))
        assert resolved.instance_type_name == "m7g.large"
        assert resolved.ami_parameter_name.endswith("/jammy/stable/current/arm64/hvm/ebs-gp2/ami-id")


class TestIdempotence:
    """Test cases for resolving already populated props."""

    def test_fully_populated_props_unchanged(self, full_props):
        """Test that explicit values are never overwritten."""
        resolved = resolve_props(full_props)
        for name in full_props.to_dict():
            assert resolved.to_dict()[name] == full_props.to_dict()[name]

    def test_resolving_twice_is_stable(self, full_props):
        """Test that resolving resolved props returns an equal value."""
        resolved = resolve_props(full_props)
        assert resolve_props(resolved) == resolved

    def test_explicit_falsy_values_kept(self):
        """Test that zero, False and empty strings are not defaulted."""
        resolved = resolve_props(VSCodeServerProps(
            vscode_user="",
            instance_volume_size=0,
            dev_server_port=0,
            home_folder="",
            dev_server_base_path="",
            auto_create_certificate=False,
            additional_tags={},
            additional_instance_role_policies=(),
        ))

        assert resolved.vscode_user == ""
        assert resolved.instance_volume_size == 0
        assert resolved.dev_server_port == 0
        assert resolved.home_folder == ""
        assert resolved.dev_server_base_path == ""
        assert resolved.auto_create_certificate is False
        assert resolve_props(resolved) == resolved


class TestCertificateRules:
    """Test cases for the custom domain and certificate rules."""

    @pytest.mark.parametrize("domain_name,hosted_zone_id", [
        ("vscode.example.com", None),
        ("vscode.example.com", "Z123456"),
        (None, "Z123456"),
        (None, None),
    ])
    def test_certificate_arn_with_auto_create_conflicts(self, domain_name, hosted_zone_id):
        """Test that certificateArn and autoCreateCertificate are exclusive."""
        props = VSCodeServerProps(
            domain_name=domain_name,
            hosted_zone_id=hosted_zone_id,
            certificate_arn=CERTIFICATE_ARN,
            auto_create_certificate=True,
        )

        with pytest.raises(ConflictingOptionError) as exc_info:
            resolve_props(props)
        assert exc_info.value.fields == ("certificateArn", "autoCreateCertificate")

    def test_auto_create_without_zone_or_domain(self):
        """Test that autoCreateCertificate needs a zone or a domain."""
        with pytest.raises(MissingDependencyError) as exc_info:
            resolve_props(VSCodeServerProps(auto_create_certificate=True))
        assert "hostedZoneId" in exc_info.value.fields
        assert "domainName" in exc_info.value.fields

    def test_auto_create_with_hosted_zone(self):
        """Test that a hosted zone satisfies autoCreateCertificate."""
        resolved = resolve_props(VSCodeServerProps(
            auto_create_certificate=True,
            hosted_zone_id="Z123456",
        ))
        assert resolved.auto_create_certificate is True

    def test_auto_create_with_domain(self):
        """Test that a domain satisfies autoCreateCertificate."""
        resolved = resolve_props(VSCodeServerProps(
            auto_create_certificate=True,
            domain_name="vscode.example.com",
            hosted_zone_id="Z123456",
        ))
        assert resolved.domain_name == "vscode.example.com"

    def test_domain_with_certificate_arn(self):
        """Test a custom domain with an existing certificate."""
        resolved = resolve_props(VSCodeServerProps(
            domain_name="vscode.example.com",
            certificate_arn=CERTIFICATE_ARN,
        ))
        assert resolved.certificate_arn == CERTIFICATE_ARN

    def test_domain_without_certificate(self):
        """Test that a custom domain needs a certificate source."""
        with pytest.raises(MissingDependencyError, match="either certificateArn or autoCreateCertificate"):
            resolve_props(VSCodeServerProps(domain_name="vscode.example.com"))

    def test_empty_certificate_arn_with_auto_create(self):
        """Test that an empty certificateArn is not treated as unset."""
        with pytest.raises(InvalidOptionError) as exc_info:
            resolve_props(VSCodeServerProps(
                domain_name="vscode.example.com",
                certificate_arn="",
                auto_create_certificate=True,
            ))
        assert exc_info.value.fields == ("certificateArn",)

    @pytest.mark.parametrize("name,field", [
        ("domain_name", "domainName"),
        ("hosted_zone_id", "hostedZoneId"),
    ])
    def test_empty_domain_fields(self, name, field):
        """Test that empty domain fields are rejected."""
        with pytest.raises(InvalidOptionError, match=f"{field} cannot be empty"):
            resolve_props(VSCodeServerProps(auto_create_certificate=True, **{name: ""}))

    def test_certificate_arn_without_domain(self):
        """Test that a certificate is only used with a custom domain."""
        with pytest.raises(MissingDependencyError, match="certificateArn can only be used with domainName"):
            resolve_props(VSCodeServerProps(certificate_arn=CERTIFICATE_ARN))

    def test_hosted_zone_alone(self):
        """Test that a hosted zone on its own is rejected."""
        with pytest.raises(MissingDependencyError) as exc_info:
            resolve_props(VSCodeServerProps(hosted_zone_id="Z123456"))
        assert exc_info.value.fields == ("hostedZoneId", "domainName")


class TestInvalidOptions:
    """Test cases for type and format validation."""

    @pytest.mark.parametrize("props,field", [
        (VSCodeServerProps(instance_volume_size=-1), "instanceVolumeSize"),
        (VSCodeServerProps(instance_volume_size="40"), "instanceVolumeSize"),
        (VSCodeServerProps(instance_volume_size=True), "instanceVolumeSize"),
        (VSCodeServerProps(dev_server_port=70000), "devServerPort"),
        (VSCodeServerProps(instance_class="M7G"), "instanceClass"),
        (VSCodeServerProps(instance_size="x large"), "instanceSize"),
        (VSCodeServerProps(vscode_user=42), "vscodeUser"),
        (VSCodeServerProps(auto_create_certificate="yes"), "autoCreateCertificate"),
        (VSCodeServerProps(additional_tags={"team": 1}), "additionalTags"),
        (VSCodeServerProps(additional_tags=["team"]), "additionalTags"),
        (VSCodeServerProps(additional_instance_role_policies=["s3:*"]), "additionalInstanceRolePolicies"),
        (VSCodeServerProps(instance_cpu_architecture="arm64"), "instanceCpuArchitecture"),
        (VSCodeServerProps(instance_operating_system="debian"), "instanceOperatingSystem"),
    ])
    def test_invalid_values(self, props, field):
        """Test that invalid values name the offending field."""
        with pytest.raises(InvalidOptionError) as exc_info:
            resolve_props(props)
        assert exc_info.value.fields == (field,)

    def test_integral_floats_normalized(self):
        """Test that whole-number floats from JSON become ints."""
        resolved = ResolvedVSCodeServerProps.from_json(
            '{"instanceVolumeSize": 40.0, "devServerPort": 3000.0}'
        )

        assert resolved.instance_volume_size == 40
        assert type(resolved.instance_volume_size) is int
        assert type(resolved.dev_server_port) is int

    def test_fractional_volume_size(self):
        """Test that fractional sizes are rejected."""
        with pytest.raises(InvalidOptionError, match="must be an integer"):
            resolve_props(VSCodeServerProps(instance_volume_size=40.5))

    def test_enum_names_accepted_as_strings(self):
        """Test that enum member names are accepted in place of members."""
        resolved = resolve_props(VSCodeServerProps(
            instance_cpu_architecture="AMD64",
            instance_operating_system="UBUNTU_24",
        ))
        assert resolved.instance_cpu_architecture is LinuxArchitectureType.AMD64
        assert resolved.instance_operating_system is LinuxFlavorType.UBUNTU_24

    def test_props_are_frozen(self):
        """Test that props cannot be mutated after handoff."""
        resolved = resolve_props(VSCodeServerProps())
        with pytest.raises(AttributeError):
            resolved.vscode_user = "root"


class TestSerialization:
    """Test cases for dict and JSON conversion."""

    def test_resolved_round_trip(self, full_props):
        """Test that serializing and parsing resolved props is lossless."""
        resolved = resolve_props(full_props)
        assert ResolvedVSCodeServerProps.from_dict(resolved.to_dict()) == resolved

    def test_resolved_json_round_trip(self):
        """Test the JSON round trip of default props."""
        resolved = resolve_props(VSCodeServerProps())
        assert ResolvedVSCodeServerProps.from_json(resolved.to_json()) == resolved

    def test_camel_case_keys(self):
        """Test serialized key names and enum values."""
        data = resolve_props(VSCodeServerProps()).to_dict()

        assert data["instanceCpuArchitecture"] == "ARM"
        assert data["instanceOperatingSystem"] == "UBUNTU_22"
        assert data["devServerPort"] == 8081
        assert data["vscodePassword"] is None
        assert data["additionalInstanceRolePolicies"] == []
        json.dumps(data)

    def test_partial_props_omit_unset_fields(self):
        """Test that partial props only serialize what is set."""
        props = VSCodeServerProps(instance_size="large", auto_create_certificate=False)
        assert props.to_dict() == {"instanceSize": "large", "autoCreateCertificate": False}

    def test_from_dict_parses_enums(self):
        """Test that enum names are parsed into members."""
        props = VSCodeServerProps.from_dict({
            "instanceCpuArchitecture": "AMD64",
            "instanceOperatingSystem": "AMAZON_LINUX_2023",
            "additionalInstanceRolePolicies": [{"Effect": "Allow", "Action": "s3:*", "Resource": "*"}],
        })

        assert props.instance_cpu_architecture is LinuxArchitectureType.AMD64
        assert props.instance_operating_system is LinuxFlavorType.AMAZON_LINUX_2023
        assert isinstance(props.additional_instance_role_policies, tuple)

    def test_from_dict_rejects_unknown_keys(self):
        """Test that unknown keys are reported."""
        with pytest.raises(InvalidOptionError, match="Unknown props: instanceType"):
            VSCodeServerProps.from_dict({"instanceType": "m7g.xlarge"})

    def test_from_dict_rejects_invalid_enum(self):
        """Test that invalid enum names are reported with the key."""
        with pytest.raises(InvalidOptionError) as exc_info:
            VSCodeServerProps.from_dict({"instanceCpuArchitecture": "arm"})
        assert exc_info.value.fields == ("instanceCpuArchitecture",)

    def test_from_json_rejects_invalid_json(self):
        """Test that malformed JSON is an invalid option."""
        with pytest.raises(InvalidOptionError, match="not valid JSON"):
            VSCodeServerProps.from_json("{instanceSize: large")

    def test_from_dict_rejects_non_mapping(self):
        """Test that only mappings are parsed."""
        with pytest.raises(InvalidOptionError, match="must be a mapping"):
            VSCodeServerProps.from_dict(["instanceSize"])


class TestPolicyStatements:
    """Test cases for additional instance role policies."""

    def test_policy_statement_objects(self):
        """Test that iam.PolicyStatement objects are rendered as statement JSON."""
        resolved = resolve_props(VSCodeServerProps(
            additional_instance_role_policies=(
                iam.PolicyStatement(actions=["s3:GetObject"], resources=["*"]),
            ),
        ))

        assert resolved.additional_instance_role_policies == (
            {"Action": "s3:GetObject", "Effect": "Allow", "Resource": "*"},
        )

    def test_mixed_statements(self):
        """Test statement objects and JSON in the same list."""
        resolved = resolve_props(VSCodeServerProps(
            additional_instance_role_policies=[
                {"Effect": "Deny", "Action": "s3:DeleteObject", "Resource": "*"},
                iam.PolicyStatement(actions=["codebuild:StartBuild"], resources=["*"]),
            ],
        ))

        assert [s["Effect"] for s in resolved.additional_instance_role_policies] == ["Deny", "Allow"]
        assert resolve_props(resolved) == resolved

    def test_partial_props_serialize_statement_objects(self):
        """Test that partial props with statement objects serialize to JSON."""
        props = VSCodeServerProps(
            additional_instance_role_policies=(
                iam.PolicyStatement(actions=["s3:GetObject"], resources=["*"]),
            ),
        )

        data = json.loads(props.to_json())

        assert data["additionalInstanceRolePolicies"] == [
            {"Action": "s3:GetObject", "Effect": "Allow", "Resource": "*"},
        ]

    def test_misspelled_key_rejected_before_engine(self):
        """Test that a misspelled statement key is an invalid option."""
        with pytest.raises(InvalidOptionError, match="unknown keys: Actions") as exc_info:
            resolve_props(VSCodeServerProps(
                additional_instance_role_policies=(
                    {"Effect": "Allow", "Actions": "s3:*", "Resource": "*"},
                ),
            ))
        assert exc_info.value.fields == ("additionalInstanceRolePolicies",)

    def test_unknown_effect_rejected(self):
        """Test that only Allow and Deny are accepted."""
        with pytest.raises(InvalidOptionError, match="Effect must be one of"):
            ResolvedVSCodeServerProps.from_dict({
                "additionalInstanceRolePolicies": [
                    {"Effect": "Permit", "Action": "s3:*", "Resource": "*"},
                ],
            })
