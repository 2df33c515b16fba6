import copy

import pytest

SRM_PAYLOAD = {
    "teamType": "srm",
    "teamName": "Board Breakers",
    "lead": {
        "name": "Lead",
        "raNumber": "RA0000000000001",
        "netId": "od7270",
        "dept": "CSE",
        "contact": 9999999999,
    },
    "members": [
        {
            "name": "M1",
            "raNumber": "RA0000000000002",
            "netId": "ab1234",
            "dept": "CSE",
            "contact": 8888888888,
        },
        {
            "name": "M2",
            "raNumber": "RA0000000000003",
            "netId": "cd5678",
            "dept": "ECE",
            "contact": 7777777777,
        },
    ],
}

NON_SRM_PAYLOAD = {
    "teamType": "non_srm",
    "teamName": "Pitch Panthers",
    "collegeName": "ABC College",
    "isClub": True,
    "clubName": "Innovators Club",
    "lead": {
        "name": "Lead",
        "collegeId": "NID1",
        "collegeEmail": "lead@abc.edu",
        "contact": 9876543210,
    },
    "members": [
        {
            "name": "M1",
            "collegeId": "NID2",
            "collegeEmail": "m1@abc.edu",
            "contact": 9876543211,
        },
        {
            "name": "M2",
            "collegeId": "NID3",
            "collegeEmail": "m2@abc.edu",
            "contact": 9876543212,
        },
    ],
}


@pytest.fixture
def srm_payload():
    return copy.deepcopy(SRM_PAYLOAD)


@pytest.fixture
def non_srm_payload():
    return copy.deepcopy(NON_SRM_PAYLOAD)
