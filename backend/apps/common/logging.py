# apps/common/logging.py

import logging

from rest_framework import serializers

from apps.common.middleware import enmascarar

logger = logging.getLogger(__name__)


class LoggedModelSerializer(serializers.ModelSerializer):
    """ModelSerializer que deja registro de cada alta/modificación hecha vía serializer."""

    def create(self, validated_data):
        instancia = super().create(validated_data)
        logger.info(
            "[serializer.create] clase=%s id=%s datos=%s",
            self.__class__.__name__, instancia.pk, enmascarar(dict(validated_data)),
        )
        return instancia

    def update(self, instance, validated_data):
        instancia = super().update(instance, validated_data)
        logger.info(
            "[serializer.update] clase=%s id=%s campos=%s",
            self.__class__.__name__, instancia.pk, sorted(validated_data),
        )
        return instancia
