"""RefAuthorshipDAO — ref_authorships table operations."""

from authorship.dao.base import RepoScopedDAO
from authorship.models.ref_authorship import RefAuthorshipRow


class RefAuthorshipDAO(RepoScopedDAO[RefAuthorshipRow]):
    model = RefAuthorshipRow
