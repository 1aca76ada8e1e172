
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError
from docannotate.auth.deps import get_current_user
from docannotate.errors import ValidationError
from docannotate.models.user import User
from docannotate.preferences.store import PreferencesPatch, PreferencesStore, ViewerPreferences

router = APIRouter(prefix="/api/preferences", tags=["preferences"])

def get_preferences_store(request: Request) -> PreferencesStore:
    return request.app.state.preferences

@router.get("", response_model=ViewerPreferences)
def read_preferences(prefs: PreferencesStore = Depends(get_preferences_store)):
    return prefs.get()

@router.patch("", response_model=ViewerPreferences)
def update_preferences(
    patch: PreferencesPatch,
    prefs: PreferencesStore = Depends(get_preferences_store),
    user: User = Depends(get_current_user),
):
    try:
        return prefs.update(patch)
    except PydanticValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ValidationError(f"Invalid fields: {', '.join(fields)}", fields=fields)

@router.delete("", response_model=ViewerPreferences)
def reset_preferences(prefs: PreferencesStore = Depends(get_preferences_store), user: User = Depends(get_current_user)):
    return prefs.reset()
