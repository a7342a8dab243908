from fastapi import APIRouter, Depends

from app.core.auth.dependencies import get_current_employee
from app.modules.employees.schemas import EmployeeResponse
from app.shared.database.models import Employee

router = APIRouter()


@router.get("/me", response_model=EmployeeResponse)
async def get_current_employee_info(
    current_employee: Employee = Depends(get_current_employee)
):
    """
    Profile of the employee behind the token

    **Headers:**
    - Authorization: Bearer {token}
    """
    return EmployeeResponse.model_validate(current_employee)


@router.post("/logout")
async def logout():
    """
    Logout (stateless JWT, informational only)

    The client must drop the token from its storage.
    """
    return {"success": True, "message": "Logged out. Remove the token from the client."}
