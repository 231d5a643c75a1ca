from rest_framework import serializers


class ClientCertificateSerializer(serializers.Serializer):
    """
    Read-only view of a certificate record. Only `subject_name` is required;
    records attached by a server component may lack the other fields.
    """

    subject = serializers.CharField(source="subject_name")
    issuer = serializers.CharField(source="issuer_name", required=False)
    serial_number = serializers.SerializerMethodField()
    not_valid_before = serializers.DateTimeField(required=False)
    not_valid_after = serializers.DateTimeField(required=False)

    def get_serial_number(self, obj):
        serial = getattr(obj, "serial_number", None)
        if serial is None:
            return None
        return format(serial, "x")
