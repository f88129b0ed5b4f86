"""Property API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .filters import PropertyFilterSet
from .models import Property
from .serializers import PropertySerializer, PropertyWriteSerializer

PUBLIC_LIST_LIMIT = 100


class IsPropertyOwner(permissions.BasePermission):
    """Only the listing's host may change or delete it."""

    message = "Forbidden"

    def has_object_permission(self, request, view, obj: Property):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.host_id == request.user.id


class PropertyViewSet(viewsets.ModelViewSet):
    """Listings: public search and detail, host-only writes."""

    queryset = Property.objects.select_related("host")
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsPropertyOwner]
    filter_backends = [DjangoFilterBackend]
    filterset_class = PropertyFilterSet

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action == "list":
            return qs.bookable()
        return qs

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return PropertyWriteSerializer
        return PropertySerializer

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())[:PUBLIC_LIST_LIMIT]
        serializer = PropertySerializer(queryset, many=True, context=self.get_serializer_context())
        return Response({"properties": serializer.data})

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        property_obj = self.get_object()
        if property_obj.host_id == request.user.id:
            property_obj.refresh_completion()
        return Response({"property": PropertySerializer(property_obj).data})

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        property_obj = serializer.save()
        return Response({"property": PropertySerializer(property_obj).data}, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        property_obj = self.get_object()
        serializer = self.get_serializer(property_obj, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        property_obj = serializer.save()
        return Response({"property": PropertySerializer(property_obj).data})

    @action(
        detail=False,
        methods=["get"],
        url_path="my-properties",
        permission_classes=[permissions.IsAuthenticated],
    )
    def my_properties(self, request):  # type: ignore
        """Caller's listings in every state, with a fresh completion checklist."""
        properties = list(Property.objects.owned_by(request.user).select_related("host"))
        for property_obj in properties:
            property_obj.refresh_completion()
        return Response({"properties": PropertySerializer(properties, many=True).data})
