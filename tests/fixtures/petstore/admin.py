from petstore.resources.pets import PetResource


class AdminPetResource(PetResource):
    """Inherits the /pets resource tag."""
